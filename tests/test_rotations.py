# tests/test_rotations.py
import math

import numpy as np

from pylsmr.rotations import givens, RotationState, advance_rotations, update_solution
from pylsmr.estimators import ResidualEstimatorState, NormEstimatorState, advance_residual_estimate, advance_norm_estimates



def test_givens_is_orthogonal():
    rng = np.random.default_rng(0)
    for a, b in rng.standard_normal((20, 2)):
        c, s, r = givens(a, b)
        assert math.isclose(c**2 + s**2, 1.0, rel_tol=1e-15)
        assert math.isclose(c * a + s * b, r, rel_tol=1e-14)
        assert math.isclose(-s * a + c * b, 0.0, abs_tol=1e-14)



def test_givens_handles_zero_and_huge_values():
    assert givens(0.0, 0.0) == (1.0, 0.0, 0.0)

    c, s, r = givens(1e300, 1e300)
    assert math.isfinite(r)
    assert math.isclose(c, 1.0 / math.sqrt(2.0))
    assert math.isclose(s, 1.0 / math.sqrt(2.0))



def test_first_rotation_step_by_hand():
    alpha0, beta0 = 2.0, 3.0
    state = RotationState.initial(alpha0, beta0)
    assert state.zetabar == 6.0

    alpha, beta, damp = 1.5, 0.5, 0.25
    new_state, step = advance_rotations(state, alpha, beta, damp)

    alphahat = math.hypot(alpha0, damp)
    rho = math.hypot(alphahat, beta)
    thetanew = (beta / rho) * alpha
    rhobar = math.hypot(rho, thetanew)

    assert math.isclose(step.chat, alpha0 / alphahat)
    assert math.isclose(step.shat, damp / alphahat)
    assert math.isclose(new_state.rho, rho)
    assert math.isclose(new_state.alphabar, (alphahat / rho) * alpha)
    assert math.isclose(step.thetabar, 0.0)
    assert math.isclose(new_state.rhobar, rhobar)
    assert math.isclose(new_state.zeta, (rho / rhobar) * 6.0)
    assert math.isclose(new_state.zetabar, -(thetanew / rhobar) * 6.0)
    assert step.rhoold == 1.0 and step.rhobarold == 1.0

    # state records are immutable; the step returns a new one
    assert state.rho == 1.0



def test_update_solution_in_place():
    state = RotationState.initial(1.0, 1.0)
    new_state, step = advance_rotations(state, 1.0, 1.0)

    x = np.zeros(3)
    h = np.array([1.0, 0.0, 0.0])
    hbar = np.zeros(3)
    v = np.array([0.0, 1.0, 0.0])
    x_id, h_id, hbar_id = id(x), id(h), id(hbar)

    update_solution(x, h, hbar, v, new_state, step)

    assert (id(x), id(h), id(hbar)) == (x_id, h_id, hbar_id)
    np.testing.assert_allclose(hbar, [1.0, 0.0, 0.0])
    np.testing.assert_allclose(x, [new_state.zeta / (new_state.rho * new_state.rhobar), 0.0, 0.0])
    np.testing.assert_allclose(h, [-step.thetanew / new_state.rho, 1.0, 0.0])



def test_residual_estimate_for_single_column():
    # A = [[1], [1]], b = [1, 3]: one step solves the problem with ||r|| = sqrt(2)
    beta0 = math.sqrt(10.0)
    alpha0 = 4.0 / beta0
    state = RotationState.initial(alpha0, beta0)
    new_state, step = advance_rotations(state, 0.0, math.sqrt(0.4))

    rstate, normr = advance_residual_estimate(ResidualEstimatorState.initial(beta0), step, new_state)

    assert math.isclose(normr, math.sqrt(2.0), rel_tol=1e-12)
    assert rstate.d == 0.0
    assert math.isclose(abs(new_state.zetabar), 0.0, abs_tol=1e-15)



def test_norm_estimates():
    nstate = NormEstimatorState.initial(2.0)
    state = RotationState.initial(2.0, 1.0)
    _, step = advance_rotations(state, 3.0, 4.0)

    nstate, norma, conda = advance_norm_estimates(nstate, 3.0, 4.0, step, 1)

    # ||A|| includes beta of this iteration, alpha only from the last one
    assert math.isclose(norma, math.hypot(2.0, 4.0))
    assert math.isclose(nstate.norm_a2, 4.0 + 16.0 + 9.0)
    # the first rhobarold is not used for the minimum
    assert nstate.minrbar == 1e100
    assert nstate.maxrbar == 1.0
    assert math.isclose(conda, max(1.0, step.rhotemp) / step.rhotemp)

    nstate2, _, _ = advance_norm_estimates(nstate, 3.0, 4.0, step, 2)
    assert nstate2.minrbar == step.rhobarold
