from dataclasses import dataclass, replace



@dataclass(frozen=True)
class LSMROptions:
    """Options of an LSMR solve.

    damp: regularization parameter lambda >= 0 in ||A x - b||^2 + lambda^2 ||x||^2.
    atol, btol: stopping tolerances. If both are 1e-9 (say), the final residual norm
        should be accurate to about 9 digits. The final x will usually have fewer
        correct digits, depending on cond(A) and the size of damp.
    conlim: the iteration stops if an estimate of cond(A) exceeds conlim. For
        compatible systems conlim could be as large as 1e12; for least-squares
        problems it should be less than 1e8. 0 disables the test.
        atol = btol = conlim = 0 gives maximum precision, possibly with many iterations.
    maxiter: iteration budget. None means max(m, n).
    log: return a ConvergenceHistory alongside x.
    verbose: log one line per iteration on the "pylsmr" logger.
    callback: called as callback(iteration, test1, test2, test3) after every iteration.
    """
    damp: float = 0.0
    atol: float = 1e-6
    btol: float = 1e-6
    conlim: float = 1e8
    maxiter: int = None
    log: bool = False
    verbose: bool = False
    callback: object = None

    @property
    def ctol(self):
        return 1.0 / self.conlim if self.conlim > 0 else 0.0

    def resolve(self, shape):
        """Validates the options and fills maxiter from the operator shape.
        """
        if self.damp < 0:
            raise ValueError(f"damp must be nonnegative, got {self.damp}")
        for name in ("atol", "btol", "conlim"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be nonnegative, got {getattr(self, name)}")
        if self.callback is not None and not callable(self.callback):
            raise TypeError("callback must be callable")

        if self.maxiter is None:
            return replace(self, maxiter=max(shape))
        if self.maxiter < 0:
            raise ValueError(f"maxiter must be nonnegative, got {self.maxiter}")
        return replace(self, maxiter=int(self.maxiter))
