# tests/test_operators.py
import numpy as np
import pytest
import scipy.sparse as sps
from scipy.sparse.linalg import aslinearoperator

from pylsmr import lsmr, lsmr_inplace, as_operator, OperatorShapeError



class ScaledShift:
    """Matrix-free operator exposing apply/apply_adjoint: (A x)_i = s_i x_i + x_{i+1}.
    """

    def __init__(self, s):
        self.s = np.asarray(s, dtype=float)
        self.shape = (len(s), len(s))
        self.dense = np.diag(self.s) + np.diag(np.ones(len(s) - 1), k=1)

    def apply(self, x):
        y = self.s * x
        y[:-1] += x[1:]
        return y

    def apply_adjoint(self, y):
        x = self.s * y
        x[1:] += y[:-1]
        return x



class PhaseDiagonal:
    """Complex diagonal operator; exposes dtype so the solver iterates in complex arithmetic.
    """

    def __init__(self, d):
        self.d = np.asarray(d, dtype=complex)
        self.shape = (len(d), len(d))
        self.dtype = self.d.dtype

    def apply(self, x):
        return self.d * x

    def apply_adjoint(self, y):
        return self.d.conj() * y



def test_matrix_free_operator_matches_dense():
    rng = np.random.default_rng(6)
    op = ScaledShift(rng.uniform(1.0, 2.0, size=15))
    b = rng.standard_normal(15)

    x_op = lsmr(op, b, atol=1e-12, btol=1e-12, maxiter=100)
    x_dense = lsmr(op.dense, b, atol=1e-12, btol=1e-12, maxiter=100)

    np.testing.assert_allclose(x_op, x_dense, atol=1e-10)
    np.testing.assert_allclose(op.dense @ x_op, b, atol=1e-8)



def test_complex_matrix_free_operator():
    rng = np.random.default_rng(12)
    d = rng.uniform(1.0, 2.0, size=8) * np.exp(1j * rng.uniform(0.0, 2 * np.pi, size=8))
    op = PhaseDiagonal(d)
    b = rng.standard_normal(8)

    assert as_operator(op).dtype == np.complex128

    x = lsmr(op, b, atol=1e-12, btol=1e-12, maxiter=50)

    assert np.iscomplexobj(x)
    np.testing.assert_allclose(d * x, b, atol=1e-8)



def test_sparse_and_linear_operator_inputs():
    rng = np.random.default_rng(10)
    dense = rng.standard_normal((15, 6))
    b = rng.standard_normal(15)

    x_dense = lsmr(dense, b)
    x_sparse = lsmr(sps.csr_matrix(dense), b)
    x_linop = lsmr(aslinearoperator(dense), b)

    np.testing.assert_allclose(x_sparse, x_dense, atol=1e-12)
    np.testing.assert_allclose(x_linop, x_dense, atol=1e-12)



def test_as_operator_passes_linear_operators_through():
    linop = aslinearoperator(np.eye(3))
    assert as_operator(linop) is linop

    with pytest.raises(TypeError):
        as_operator(object())



def test_dimension_mismatch_fails_fast():
    calls = []

    class Recording(ScaledShift):
        def apply(self, x):
            calls.append("apply")
            return super().apply(x)

    op = Recording(np.ones(4))

    with pytest.raises(OperatorShapeError, match="b has length 3 but should have length 4"):
        lsmr(op, np.ones(3))
    with pytest.raises(OperatorShapeError, match="x has length 5"):
        lsmr_inplace(np.zeros(5), op, np.ones(4))
    with pytest.raises(OperatorShapeError):
        lsmr(op, np.ones((4, 1)))

    assert calls == []
    assert issubclass(OperatorShapeError, ValueError)



def test_invalid_options():
    A = np.eye(2)
    b = np.ones(2)
    with pytest.raises(ValueError):
        lsmr(A, b, damp=-1.0)
    with pytest.raises(ValueError):
        lsmr(A, b, atol=-1e-6)
    with pytest.raises(ValueError):
        lsmr(A, b, maxiter=-1)
    with pytest.raises(TypeError):
        lsmr(A, b, callback=3)
    with pytest.raises(TypeError):
        lsmr(A, b, tolerance=1e-3)



def test_inplace_requires_compatible_array():
    A = np.eye(3)
    b = np.ones(3)
    with pytest.raises(TypeError):
        lsmr_inplace(np.zeros(3, dtype=int), A, b)
    with pytest.raises(TypeError):
        lsmr_inplace([0.0, 0.0, 0.0], A, b)
