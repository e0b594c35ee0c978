"""Package logger shared by every module of expression_eval."""
import logging

# The host application decides on handlers and levels
logger: logging.Logger = logging.getLogger("expression_eval")
logger.addHandler(logging.NullHandler())
