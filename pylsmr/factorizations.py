import numpy as np

from .operators import as_operator, check_length, solver_dtype



class GolubKahan:
    """Streaming Golub-Kahan bidiagonalization of A started from the residual b - A x.

    Produces one pair (alpha, beta) per call to ``step``, with the recurrences

        beta_{k+1} u_{k+1} = A v_k - alpha_k u_k
        alpha_{k+1} v_{k+1} = A^H u_{k+1} - beta_{k+1} v_k

    Only the current u and v are stored. When beta vanishes the adjoint half of the
    step is skipped and v, alpha keep their previous values.

    Parameters
    ----------
    A : LinearOperator
        Must support A.matvec(x) and A.rmatvec(y).
    b : ndarray, shape (m,)
        Right-hand side; copied, never modified.
    x : ndarray, shape (n,), optional
        Starting point. The process starts from b - A x. If None, x = 0 and the
        initial matvec is still counted.
    dtype : numpy dtype, optional
        Working dtype of u and v.
    """

    def __init__(self, A, b, x=None, dtype=None):

        self.A = as_operator(A)
        m, n = self.A.shape
        check_length("b", b, m)
        if x is not None: check_length("x", x, n)
        if dtype is None: dtype = solver_dtype(self.A, b)

        self.u = np.array(b, dtype=dtype, copy=True)
        self.v = np.zeros(n, dtype=dtype)
        self.x = x
        self.alpha = 0.0
        self.beta = 0.0
        self.n_matvec = 0
        self.n_rmatvec = 0



    def start(self):
        """Forms beta u = b - A x and alpha v = A^H u. Returns (alpha, beta).

        The adjoint product is taken even when beta = 0 (then v = 0, alpha = 0), so a
        started process has always counted one matvec and one rmatvec.
        """
        x = self.x if self.x is not None else np.zeros(self.A.shape[1], dtype=self.u.dtype)
        self.u -= self.A.matvec(x)
        self.n_matvec += 1
        self.beta = np.linalg.norm(self.u)
        if self.beta > 0:
            self.u *= 1.0/self.beta

        self.v[:] = self.A.rmatvec(self.u)
        self.n_rmatvec += 1
        self.alpha = np.linalg.norm(self.v)
        if self.alpha > 0:
            self.v *= 1.0/self.alpha

        return self.alpha, self.beta



    def step(self):
        """Advances the bidiagonalization by one step. Returns (alpha, beta).
        """
        self.u *= -self.alpha
        self.u += self.A.matvec(self.v)
        self.n_matvec += 1
        self.beta = np.linalg.norm(self.u)

        if self.beta > 0:
            self.u *= 1.0/self.beta
            self.v *= -self.beta
            self.v += self.A.rmatvec(self.u)
            self.n_rmatvec += 1
            self.alpha = np.linalg.norm(self.v)
            if self.alpha > 0:
                self.v *= 1.0/self.alpha

        return self.alpha, self.beta
