import matplotlib.pyplot as plt
import numpy as np



def plot_history(history, plot_path=None):
    """Plots the three LSMR test statistics of a ConvergenceHistory against the iteration.

    Dashed lines mark the tolerances they are compared with (atol for anorm, btol for
    rnorm, ctol for cnorm when positive).
    """

    if history.iters == 0:
        raise ValueError("history has no iterations to plot.")

    iters = np.arange(1, history.iters + 1)

    fig, axs = plt.subplots(figsize=(8,5))
    axs.semilogy(iters, history["anorm"], color="green", label="anorm = ||A^H r|| / (||A|| ||r||)")
    axs.semilogy(iters, history["rnorm"], color="purple", label="rnorm = ||r|| / ||b||")
    axs.semilogy(iters, history["cnorm"], color="orange", label="cnorm = 1 / cond(A)")

    if history.atol > 0: axs.axhline(history.atol, color="green", ls="--")
    if history.btol > 0: axs.axhline(history.btol, color="purple", ls="--")
    if history.ctol > 0: axs.axhline(history.ctol, color="orange", ls="--")

    axs.set_xlabel("iteration")
    axs.set_title(f"LSMR convergence (stop = {int(history.stop)})")
    axs.legend()
    fig.tight_layout()

    if plot_path is not None:
        fig.savefig(plot_path, dpi=250)
        plt.close()
        return None
    else:
        plt.show()
        return None
