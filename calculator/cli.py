import logging
import sys
from typing import Optional

from calculator import config
from calculator.errors import CalculatorError
from calculator.runtime import evaluate
from calculator.utils import format_number

logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    """Evaluates a single expression argument; returns the process exit code"""
    logging.basicConfig(level=config.get_log_level(), format=config.LOG_FORMAT)
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print(config.USAGE)
        return 2

    try:
        result = evaluate(args[0])
    except CalculatorError as e:
        logger.debug("evaluation failed with %s", e.kind)
        print(f"Error evaluating the expression: {e.errmsg}")
        return 1

    print(f"Result: {format_number(result)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
