"""
Running estimates of ||r||, ||A|| and cond(A).

The residual estimate runs a second rotation chain (Qtilde) one step behind the
primary one, so ``advance_residual_estimate`` must be called after
``advance_rotations`` of the same iteration.
"""

import math
from dataclasses import dataclass, replace

from .rotations import givens



@dataclass(frozen=True)
class ResidualEstimatorState:
    betadd: float
    betad: float
    rhodold: float
    tautildeold: float
    thetatilde: float
    d: float

    @classmethod
    def initial(cls, beta):
        return cls(betadd=beta, betad=0.0, rhodold=1.0, tautildeold=0.0, thetatilde=0.0, d=0.0)



def advance_residual_estimate(state, step, rotation_state):
    """Applies Qhat, Q and the lagged Qtilde to the right-hand side.

    ``step`` and ``rotation_state`` are the outputs of ``advance_rotations`` for this
    iteration. Returns (next_state, normr) where normr estimates ||b - A x||.
    """

    # Qhat_{k,2k+1}
    betaacute = step.chat * state.betadd
    betacheck = -step.shat * state.betadd

    # Q_{k,k+1}
    betahat = step.c * betaacute
    betadd = -step.s * betaacute

    # Qtilde_{k-1}
    thetatildeold = state.thetatilde
    ctildeold, stildeold, rhotildeold = givens(state.rhodold, step.thetabar)
    thetatilde = stildeold * rotation_state.rhobar
    rhodold = ctildeold * rotation_state.rhobar
    betad = -stildeold * state.betad + ctildeold * betahat

    tautildeold = (step.zetaold - thetatildeold * state.tautildeold) / rhotildeold
    taud = (rotation_state.zeta - thetatilde * tautildeold) / rhodold
    d = state.d + betacheck**2
    normr = math.sqrt(d + (betad - taud)**2 + betadd**2)

    new_state = replace(state, betadd=betadd, betad=betad, rhodold=rhodold, tautildeold=tautildeold, thetatilde=thetatilde, d=d)

    return new_state, normr



@dataclass(frozen=True)
class NormEstimatorState:
    norm_a2: float
    maxrbar: float
    minrbar: float

    @classmethod
    def initial(cls, alpha):
        return cls(norm_a2=alpha**2, maxrbar=0.0, minrbar=1e100)



def advance_norm_estimates(state, alpha, beta, step, iteration):
    """Updates the Frobenius-norm estimate of A and the cond(A) estimate.

    Returns (next_state, normA, condA). The estimate of ||A|| includes beta of this
    iteration but alpha only from the previous one.
    """
    norm_a2 = state.norm_a2 + beta**2
    norm_a = math.sqrt(norm_a2)
    norm_a2 += alpha**2

    maxrbar = max(state.maxrbar, step.rhobarold)
    minrbar = state.minrbar
    if iteration > 1:
        minrbar = min(minrbar, step.rhobarold)

    denom = min(minrbar, step.rhotemp)
    if denom == 0.0:
        cond_a = math.inf
    else:
        cond_a = max(maxrbar, step.rhotemp) / denom

    return NormEstimatorState(norm_a2=norm_a2, maxrbar=maxrbar, minrbar=minrbar), norm_a, cond_a
