import numpy as np
from scipy.sparse.linalg import LinearOperator, aslinearoperator



class OperatorShapeError(ValueError):
    """Raised when a vector does not match the shape of the operator.
    """
    pass



def as_operator(A):
    """Wraps A as a scipy LinearOperator.

    Accepts numpy arrays, scipy sparse matrices, LinearOperators, or any object
    exposing ``shape``, ``apply(x)`` and ``apply_adjoint(y)``. The adjoint must be
    the true (conjugate) transpose of ``apply``; this is not checked. Such objects
    should also expose ``dtype``: without it they are taken to be float64, and a
    complex-valued operator then fails when its output is written to real buffers.
    """

    if isinstance(A, LinearOperator):
        return A

    if hasattr(A, "apply") and hasattr(A, "apply_adjoint"):
        m, n = A.shape
        dtype = getattr(A, "dtype", None)
        if dtype is None: dtype = np.float64
        return LinearOperator((m, n), matvec=A.apply, rmatvec=A.apply_adjoint, dtype=dtype)

    try:
        return aslinearoperator(A)
    except TypeError as e:
        raise TypeError("A must be an array, a sparse matrix, a LinearOperator, or expose apply/apply_adjoint.") from e



def check_length(name, vec, expected):
    """Raises OperatorShapeError unless vec is 1D with the expected length.
    """
    if np.ndim(vec) != 1:
        raise OperatorShapeError(f"{name} must be one-dimensional but has shape {np.shape(vec)}")
    if len(vec) != expected:
        raise OperatorShapeError(f"{name} has length {len(vec)} but should have length {expected}")



def check_dimensions(A, b, x, **work):
    """Checks b (length m), x and any working vectors (length n) against A.shape = (m, n).
    """
    m, n = A.shape
    check_length("x", x, n)
    for name, vec in work.items():
        check_length(name, vec, n)
    check_length("b", b, m)



def solver_dtype(A, b):
    """Floating dtype of the iteration: the promotion of A, b and float64.
    """
    return np.result_type(A.dtype, np.asarray(b).dtype, np.float64)
