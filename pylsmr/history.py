import numpy as np

from .stopping import StopReason



class ConvergenceHistory:
    """Record of one LSMR solve.

    Scalars: atol, btol, ctol, norm_a, norm_r, norm_ar, cond_a, norm_x, iters,
    mvps (products with A), mtvps (products with A^H), stop, isconverged.
    Per-iteration sequences are indexed by key: ``history["anorm"]`` (test2),
    ``history["rnorm"]`` (test1) and ``history["cnorm"]`` (test3).
    """

    keys = ("anorm", "rnorm", "cnorm")

    def __init__(self, atol, btol, ctol):
        self.atol = atol
        self.btol = btol
        self.ctol = ctol
        self.norm_a = None
        self.norm_r = None
        self.norm_ar = None
        self.cond_a = None
        self.norm_x = None
        self.iters = 0
        self.mvps = 0
        self.mtvps = 0
        self.stop = None
        self.isconverged = False
        self._data = {key: [] for key in self.keys}

    def __getitem__(self, key):
        return np.asarray(self._data[key], dtype=float)

    def __len__(self):
        return self.iters

    def __repr__(self):
        return f"ConvergenceHistory(iters={self.iters}, converged={self.isconverged}, stop={self.stop!r})"

    def record(self, iteration, tests):
        self.iters = iteration
        self._data["anorm"].append(tests.test2)
        self._data["rnorm"].append(tests.test1)
        self._data["cnorm"].append(tests.test3)

    def count(self, mvps, mtvps):
        self.mvps = mvps
        self.mtvps = mtvps

    def finalize(self, stop, norm_a, norm_r, norm_ar, cond_a, norm_x):
        self.stop = StopReason(stop)
        self.isconverged = self.stop.converged
        self.norm_a = norm_a
        self.norm_r = norm_r
        self.norm_ar = norm_ar
        self.cond_a = cond_a
        self.norm_x = norm_x



class NullHistory:
    """Stands in for ConvergenceHistory when log=False; records nothing.
    """

    def record(self, iteration, tests):
        pass

    def count(self, mvps, mtvps):
        pass

    def finalize(self, stop, norm_a, norm_r, norm_ar, cond_a, norm_x):
        pass



class ProgressLogger:
    """Observer that writes one line per iteration to a logger.
    """

    def __init__(self, logger):
        self.logger = logger
        self.logger.info("=== lsmr ===")
        self.logger.info("%4s\t%7s\t\t%7s\t\t%7s", "iter", "anorm", "cnorm", "rnorm")

    def __call__(self, iteration, test1, test2, test3):
        self.logger.info("%3d\t%1.2e\t%1.2e\t%1.2e", iteration, test2, test3, test1)

    def done(self, stop, iteration):
        self.logger.info("stop %d after %d iterations: %s", int(stop), iteration, StopReason(stop).message)
