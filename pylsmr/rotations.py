"""
Givens rotation chains of LSMR.

Each iteration folds the damping parameter into the bidiagonal (Qhat), reduces the
damped bidiagonal to upper bidiagonal R (Q), and reduces R^T to Rbar (Qbar). The
rotation state is threaded through ``advance_rotations``, which returns the next
state together with the intermediate values of that iteration. The residual and
condition estimators and the solution update all consume those intermediates.
"""

import math
from dataclasses import dataclass, replace



def givens(a, b):
    """Plane rotation (c, s, r) with c*a + s*b = r and c^2 + s^2 = 1.

    r = hypot(a, b) is computed without overflow. A zero pair gives the identity.
    """
    r = math.hypot(a, b)
    if r == 0.0:
        return 1.0, 0.0, 0.0
    return a / r, b / r, r



@dataclass(frozen=True)
class RotationState:
    """Scalars carried from one iteration to the next by the two rotation chains.
    """
    alphabar: float
    rho: float
    rhobar: float
    cbar: float
    sbar: float
    zeta: float
    zetabar: float

    @classmethod
    def initial(cls, alpha, beta):
        return cls(alphabar=alpha, rho=1.0, rhobar=1.0, cbar=1.0, sbar=0.0, zeta=0.0, zetabar=alpha*beta)



@dataclass(frozen=True)
class RotationStep:
    """Intermediate values produced by one application of the rotations.
    """
    chat: float
    shat: float
    c: float
    s: float
    rhoold: float
    rhobarold: float
    thetanew: float
    thetabar: float
    rhotemp: float
    zetaold: float



def advance_rotations(state, alpha, beta, damp=0.0):
    """Applies Qhat, Q and Qbar for the new bidiagonal pair (alpha, beta).

    Returns (next_state, step).
    """

    # Qhat_{k,2k+1}: fold the damping term into alphabar
    chat, shat, alphahat = givens(state.alphabar, damp)

    # Q_k turns B_k into R_k
    c, s, rho = givens(alphahat, beta)
    thetanew = s * alpha
    alphabar = c * alpha

    # Qbar_k turns R_k^T into Rbar_k
    thetabar = state.sbar * rho
    rhotemp = state.cbar * rho
    cbar, sbar, rhobar = givens(rhotemp, thetanew)
    zeta = cbar * state.zetabar
    zetabar = -sbar * state.zetabar

    step = RotationStep(
        chat=chat, shat=shat, c=c, s=s,
        rhoold=state.rho, rhobarold=state.rhobar,
        thetanew=thetanew, thetabar=thetabar, rhotemp=rhotemp,
        zetaold=state.zeta,
    )
    new_state = replace(state, alphabar=alphabar, rho=rho, rhobar=rhobar, cbar=cbar, sbar=sbar, zeta=zeta, zetabar=zetabar)

    return new_state, step



def update_solution(x, h, hbar, v, state, step):
    """Updates hbar, x and h in place from the rotations of the current iteration.

        hbar <- h - (thetabar rho / (rhoold rhobarold)) hbar
        x    <- x + (zeta / (rho rhobar)) hbar
        h    <- v - (thetanew / rho) h
    """
    hbar *= -step.thetabar * state.rho / (step.rhoold * step.rhobarold)
    hbar += h
    x += (state.zeta / (state.rho * state.rhobar)) * hbar
    h *= -step.thetanew / state.rho
    h += v
