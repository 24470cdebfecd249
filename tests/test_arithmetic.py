import math

import pytest

from calculator.parser import to_postfix
from calculator.runtime import evaluate, evaluate_postfix
from calculator.tokenizer import tokenize


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1.0),
        pytest.param("-1", -1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("1*4+5", 9.0),
        pytest.param("1+4*5", 21.0),
        pytest.param("10/5/2/2", 0.5),
        pytest.param("10+2*(5+3-1)", 24.0),
        # precedence
        pytest.param("2+3*4", 14.0),
        pytest.param("2*3+4", 10.0),
        pytest.param("2+4-2*2/2^4", 5.75),
        # associativity
        pytest.param("2*3*4", 24.0),
        pytest.param("4-7-9", -12.0),
        pytest.param("18/3/2", 3.0),
        pytest.param("2^2^3", 256.0),
        # brackets
        pytest.param("2*(12+6)", 36.0),
        pytest.param("(12+(3-(2*2)))", 11.0),
        pytest.param("(2+3)^2", 25.0),
        pytest.param("(1+2)-3", 0.0),
        pytest.param("(-2)^2", 4.0),
        # unary minus
        pytest.param("2^-2", 0.25),
        pytest.param("3+-6", -3.0),
        pytest.param("6--2", 8.0),
        pytest.param("4*-2", -8.0),
        pytest.param("6/-2", -3.0),
        # decimals
        pytest.param("324.", 324.0),
        pytest.param("0.5*4", 2.0),
        pytest.param("4^0.5", 2.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float) -> None:
    assert evaluate(code) == expected_ret_val


def test_stages_compose_to_evaluate() -> None:
    code = "1+14*(54^2)"
    assert evaluate_postfix(to_postfix(tokenize(code))) == evaluate(code) == 40825.0


def test_evaluate_is_deterministic() -> None:
    results = {evaluate("7/6/2000") for _ in range(5)}
    assert len(results) == 1


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1/0", math.inf),
        pytest.param("-1/0", -math.inf),
        pytest.param("1/-0", -math.inf),
        pytest.param("0^-1", math.inf),
    ],
)
def test_eval_infinities(code: str, expected_ret_val: float) -> None:
    assert evaluate(code) == expected_ret_val


@pytest.mark.parametrize("code", ["0/0", "(-8)^0.5", "-8^0.5"])
def test_eval_nan(code: str) -> None:
    assert math.isnan(evaluate(code))
