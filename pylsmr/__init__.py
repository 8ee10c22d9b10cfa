from .lsmr import lsmr, lsmr_inplace
from .operators import as_operator, OperatorShapeError
from .options import LSMROptions
from .stopping import StopReason
from .history import ConvergenceHistory
from .factorizations import GolubKahan
from .matrices import first_order_derivative_1d, gaussian_blur_1d
