import argparse
import logging
import sys

from linecalc.environment import Environment
from linecalc.history import History
from linecalc.render import render
from linecalc.runtime import evaluate
from linecalc.value import Error, Value


class Console:
    def __init__(self) -> None:
        self.env = Environment()
        self.history = History()

    def submit(self, line: str) -> Value | None:
        """Evaluates an entered line. Blank lines are not evaluated and give ``None``."""
        self.history.reset()
        if not line.strip():
            return None
        self.history.add_entry(line)
        result = evaluate(self.env, line)
        self.env.set_ans(result)
        return result


def show(value: Value | None) -> None:
    if value is None:
        return
    text = render(value)
    if text is None:
        return
    print(text, file=sys.stderr if isinstance(value, Error) else sys.stdout)


def main() -> None:
    arg_parser = argparse.ArgumentParser(description="Line-oriented calculator console")
    arg_parser.add_argument("--prompt", default="calc > ", help="prompt printed before each input line")
    arg_parser.add_argument("-v", "--verbose", action="store_true", help="log tokenizer and parser diagnostics")
    args = arg_parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    console = Console()
    show(evaluate(console.env, "about()"))

    while True:
        try:
            code = input(args.prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        show(console.submit(code))


if __name__ == "__main__":
    main()
