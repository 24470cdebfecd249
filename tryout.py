from calculator.parser import ParserError, format_postfix, to_postfix
from calculator.runtime import CalcRuntimeError, evaluate_postfix
from calculator.tokenizer import TokenizerError, tokenize
from calculator.utils import format_number

for code in [
    "5",
    "-1",
    "1+1",
    "-1+1",
    "1+-1",
    "4+6*3",
    "(4+6)",
    "(4+6)*3",
    "7/6/2000",
    "5^2",
    "2^2^3",
    "2^-2",
    "1+(14*(54^2))",
    "10/5/2",
    "1/0",
    "(-8)^0.5",
    "1+2)",
    "((1+2)",
    "2(3)",
    "1.2.3+4",
    "2*+3",
    "12 + 3",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except TokenizerError as e:
        print(e)
        continue

    print(f"tokens: {' '.join(str(t) for t in tokens)}")

    try:
        postfix = to_postfix(tokens)
    except ParserError as e:
        print(e)
        continue
    print(f"postfix: {format_postfix(postfix)}")

    try:
        result = evaluate_postfix(postfix)
    except CalcRuntimeError as e:
        print(e)
        continue
    print(f"result: {format_number(result)}")
