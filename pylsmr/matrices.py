import numpy as np

import scipy.sparse as sps
from scipy.linalg import toeplitz



def first_order_derivative_1d(N, boundary="none"):
    """Sparse (CSR) forward-difference operator x_i - x_{i+1} on a 1D signal of length N.

    Boundary parameter specifies how the last row is handled:
      - "none"      : drop it, giving an (N-1)×N rank-deficient operator
      - "zero"      : keep it as x_{N-1} (zero extension), square and invertible
      - "periodic"  : wrap around, x_{N-1} - x_0
      - "reflexive" : zero row

    Also returns a dense matrix W whose columns span the nullspace (None if trivial).
    """

    if boundary not in ("none", "periodic", "zero", "reflexive"):
        raise ValueError(f"Invalid boundary parameter {boundary!r}.")

    d_mat = sps.diags([np.ones(N), -np.ones(N - 1)], offsets=[0, 1], shape=(N, N), format="lil")
    W = np.atleast_2d(np.ones(N)).T / np.sqrt(N)

    if boundary == "periodic":
        d_mat[-1, 0] = -1
    elif boundary == "zero":
        W = None
    elif boundary == "none":
        d_mat = d_mat[:-1, :]
    elif boundary == "reflexive":
        d_mat[-1, -1] = 0

    return sps.csr_matrix(d_mat), W



def gaussian_blur_1d(N, sigma=2.0, truncate=4.0):
    """Dense symmetric Toeplitz Gaussian blur of width sigma (in samples), rows summing to about one.

    The singular values decay like a Gaussian, so the matrix is severely
    ill-conditioned for moderate sigma; a standard test problem for damped least squares.
    """
    if sigma <= 0:
        raise ValueError("sigma must be positive.")

    dist = np.arange(N, dtype=float)
    col = np.exp(-0.5 * (dist / sigma)**2)
    col[dist > truncate * sigma] = 0.0
    col /= sigma * np.sqrt(2.0 * np.pi)

    return toeplitz(col)
