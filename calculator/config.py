"""Settings for the command line front ends; the library itself takes none"""
import logging
import os

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

USAGE = "Please provide an expression to evaluate as one string without spaces. Example: 2*5"


def get_log_level() -> str:
    """Level named by CALCULATOR_LOG_LEVEL, or the default when unset or unknown to logging"""
    level = os.environ.get("CALCULATOR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level
