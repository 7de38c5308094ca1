from linecalc.environment import Environment
from linecalc.parser import ParserError, parse
from linecalc.render import render
from linecalc.runtime import evaluate_node
from linecalc.tokenizer import TokenizerError, tokenize

for code in [
    "5",
    "-1",
    "1 + 1",
    "-1 + 1",
    "1 - -1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "2 ^ 3 ^ 2",
    "10 % 3 + 1",
    "7/6/2000",
    "7 / 6 / 2000",
    "1.5e3 * 2",
    "var = (1 + 14 * (54^2))",
    "a = b = 10",
    "-(1 + 2)",
    "help()",
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
        statement = parse(tokens)
    except ParserError as e:
        print(e)
        continue
    print(f"ast: {statement}")

    env = Environment()
    result = evaluate_node(statement, env)
    print(f"result: {result!r}")
    print(f"rendered: {render(result)}")
