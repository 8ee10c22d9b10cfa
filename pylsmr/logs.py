import sys
import logging



def config_logger(name="pylsmr", format="%(message)s", stream=sys.stdout, level=logging.INFO, propagate=False):
    """Configures the logger `name` with a single stream handler and returns it.

    Existing handlers are removed first so repeated calls do not duplicate output.
    With stream=None a NullHandler is installed instead.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = propagate

    for hdlr in list(logger.handlers):
        logger.removeHandler(hdlr)

    if stream is None:
        logger.addHandler(logging.NullHandler())
    else:
        hdlr = logging.StreamHandler(stream)
        hdlr.setLevel(level)
        hdlr.setFormatter(logging.Formatter(format))
        logger.addHandler(hdlr)

    return logger



def get_logger(name="pylsmr"):
    """Returns the logger `name`, configuring it on first use.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger = config_logger(name)
    return logger
