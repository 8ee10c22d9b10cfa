import math
from dataclasses import dataclass
from enum import IntEnum



class StopReason(IntEnum):
    """Why the iteration ended. The integer values are the classical LSMR istop codes.
    """
    CONTINUE = 0    # also: x0 already solves the problem (b - A x0 = 0 or A^H (b - A x0) = 0)
    BTOL = 1        # ||r|| / ||b|| <= btol + atol ||A|| ||x|| / ||b||
    ATOL = 2        # ||A^H r|| / (||A|| ||r||) <= atol
    CONLIM = 3      # cond(A) estimate >= conlim
    BTOL_EPS = 4    # as BTOL with btol = eps
    ATOL_EPS = 5    # as ATOL with atol = eps
    COND_EPS = 6    # cond(A) estimate >= 1/eps
    MAXITER = 7     # iteration budget exhausted

    @property
    def converged(self):
        return self not in (StopReason.CONLIM, StopReason.COND_EPS, StopReason.MAXITER)

    @property
    def message(self):
        return _MESSAGES[self]



_MESSAGES = {
    StopReason.CONTINUE: "The exact solution is x = x0",
    StopReason.BTOL: "Ax - b is small enough, given atol, btol",
    StopReason.ATOL: "The least-squares solution is good enough, given atol",
    StopReason.CONLIM: "The estimate of cond(Abar) has exceeded conlim",
    StopReason.BTOL_EPS: "Ax - b is small enough for this machine",
    StopReason.ATOL_EPS: "The least-squares solution is good enough for this machine",
    StopReason.COND_EPS: "Cond(Abar) seems to be too large for this machine",
    StopReason.MAXITER: "The iteration limit has been reached",
}



@dataclass(frozen=True)
class StoppingTests:
    """The three LSMR test statistics plus the derived quantities used by the stop rules.

    test1: relative residual ||r|| / ||b||.
    test2: relative normal-equation residual ||A^H r|| / (||A|| ||r||).
    test3: inverse condition estimate 1 / cond(A).
    t1:    test1 / (1 + ||A|| ||x|| / ||b||).
    rtol:  btol + atol ||A|| ||x|| / ||b||.
    """
    test1: float
    test2: float
    test3: float
    t1: float
    rtol: float



def compute_tests(normr, normar, norma, conda, normx, normb, atol, btol):
    """Evaluates the stopping statistics from the current estimates.
    """
    test1 = normr / normb
    if normr > 0 and norma > 0:
        test2 = normar / (norma * normr)
    else:
        test2 = math.inf
    test3 = 1.0 / conda
    t1 = test1 / (1.0 + norma * normx / normb)
    rtol = btol + atol * norma * normx / normb
    return StoppingTests(test1=test1, test2=test2, test3=test3, t1=t1, rtol=rtol)



def check_stop(tests, iteration, maxiter, atol, ctol):
    """Applies the stop rules in priority order; returns the first that fires.

    The machine-precision rules guard against atol, btol or conlim set to zero,
    acting as atol = btol = eps and conlim = 1/eps.
    """
    if iteration >= maxiter:
        return StopReason.MAXITER
    if 1.0 + tests.test3 <= 1.0:
        return StopReason.COND_EPS
    if 1.0 + tests.test2 <= 1.0:
        return StopReason.ATOL_EPS
    if 1.0 + tests.t1 <= 1.0:
        return StopReason.BTOL_EPS
    if tests.test3 <= ctol:
        return StopReason.CONLIM
    if tests.test2 <= atol:
        return StopReason.ATOL
    if tests.test1 <= tests.rtol:
        return StopReason.BTOL
    return StopReason.CONTINUE
