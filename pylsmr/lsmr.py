import numpy as np

from .operators import as_operator, check_dimensions, solver_dtype
from .factorizations import GolubKahan
from .rotations import RotationState, advance_rotations, update_solution
from .estimators import ResidualEstimatorState, NormEstimatorState, advance_residual_estimate, advance_norm_estimates
from .stopping import StopReason, compute_tests, check_stop
from .history import ConvergenceHistory, NullHistory, ProgressLogger
from .options import LSMROptions
from .logs import get_logger



def lsmr(A, b, x0=None, **kwargs):
    """Same as ``lsmr_inplace`` but allocates the solution: zeros, or a copy of x0.

    Returns x, or (x, history) when log=True.
    """
    A = as_operator(A)
    dtype = solver_dtype(A, b)
    if x0 is None:
        x = np.zeros(A.shape[1], dtype=dtype)
    else:
        x0 = np.asarray(x0)
        x = np.array(x0, dtype=np.result_type(dtype, x0.dtype), copy=True)
    return lsmr_inplace(x, A, b, **kwargs)



def lsmr_inplace(x, A, b, **kwargs):
    r"""Minimizes ||A x - b||_2^2 + damp^2 ||x||_2^2, updating x in place.

    If several solutions exist, the one of minimum norm is returned (for x = 0 on
    entry). The method is based on the Golub-Kahan bidiagonalization process. It is
    algebraically equivalent to applying MINRES to the normal equations
    (A^H A + damp^2 I) x = A^H b, but has better numerical properties, especially if
    A is ill-conditioned.

    Parameters
    ----------
    x : ndarray, shape (n,)
        Initial guess; overwritten with the solution.
    A : array, sparse matrix, LinearOperator, or object with apply/apply_adjoint
        Linear operator of shape (m, n). Only products with A and A^H are used.
    b : ndarray, shape (m,)
        Right-hand side. Not modified.
    **kwargs
        Fields of ``LSMROptions``: damp, atol, btol, conlim, maxiter, log, verbose,
        callback.

    Returns
    -------
    x : ndarray
        The approximate solution (the same array that was passed in).
    history : ConvergenceHistory
        Only when log=True.

    Raises
    ------
    OperatorShapeError
        If x or b does not match the shape of A.
    """
    if not isinstance(x, np.ndarray):
        raise TypeError("x must be a numpy array; it is updated in place")
    A = as_operator(A)
    opts = LSMROptions(**kwargs).resolve(A.shape)
    n = A.shape[1]

    dtype = np.result_type(solver_dtype(A, b), x.dtype)
    h, hbar = np.zeros(n, dtype=dtype), np.zeros(n, dtype=dtype)
    check_dimensions(A, b, x, h=h, hbar=hbar)
    if not np.can_cast(dtype, x.dtype, casting="same_kind"):
        raise TypeError(f"x has dtype {x.dtype} but the iteration needs {dtype}")

    history = ConvergenceHistory(opts.atol, opts.btol, opts.ctol) if opts.log else NullHistory()
    observers = []
    progress = None
    if opts.verbose:
        progress = ProgressLogger(get_logger())
        observers.append(progress)
    if opts.callback is not None:
        observers.append(opts.callback)

    # beta u = b - A x,  alpha v = A^H u; u and v live in the process
    process = GolubKahan(A, b, x, dtype=dtype)
    alpha, beta = process.start()
    v = process.v

    rotation = RotationState.initial(alpha, beta)
    residual = ResidualEstimatorState.initial(beta)
    norms = NormEstimatorState.initial(alpha)
    h[:] = v

    normb = beta
    normr = beta
    normar = alpha * beta
    norma = alpha
    conda = 1.0
    normx = np.linalg.norm(x)

    stop = StopReason.CONTINUE
    iteration = 0

    # Nothing to do if b - A x = 0 or A^H (b - A x) = 0
    if normar != 0:
        while iteration < opts.maxiter:
            iteration += 1
            alpha, beta = process.step()

            rotation, step = advance_rotations(rotation, alpha, beta, opts.damp)
            update_solution(x, h, hbar, v, rotation, step)

            residual, normr = advance_residual_estimate(residual, step, rotation)
            norms, norma, conda = advance_norm_estimates(norms, alpha, beta, step, iteration)

            normar = abs(rotation.zetabar)
            normx = np.linalg.norm(x)
            tests = compute_tests(normr, normar, norma, conda, normx, normb, opts.atol, opts.btol)

            history.record(iteration, tests)
            for observer in observers:
                observer(iteration, tests.test1, tests.test2, tests.test3)

            stop = check_stop(tests, iteration, opts.maxiter, opts.atol, opts.ctol)
            if stop != StopReason.CONTINUE:
                break

    history.count(process.n_matvec, process.n_rmatvec)
    history.finalize(stop, norma, normr, normar, conda, normx)
    if progress is not None:
        progress.done(stop, iteration)

    if opts.log:
        return x, history
    return x
