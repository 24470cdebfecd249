import logging

from calculator import config
from calculator.errors import CalculatorError
from calculator.runtime import evaluate
from calculator.utils import format_number


if __name__ == "__main__":
    logging.basicConfig(level=config.get_log_level(), format=config.LOG_FORMAT)

    while True:
        try:
            code = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not code:
            continue

        try:
            result = evaluate(code)
        except CalculatorError as e:
            print(e)
            continue

        print(format_number(result))
