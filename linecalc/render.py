from typing import Optional

from linecalc.value import Error, Float, Info, InfoKind, Integer, Nil, Value

ABOUT_TEXT = "\n".join(
    [
        "This is a REPL calculator: type a statement, press Enter, and it is evaluated on the spot.",
        "Variables you assign are kept until the session ends.",
        "",
        "Try running `help()` for more info.",
    ]
)

HELP_TEXT = "\n".join(
    [
        "Use any of the following operations:",
        "+ for addition",
        "- for subtraction",
        "* for multiplication",
        "/ for division",
        "^ for exponentation",
        "% for remainder",
        "= for assignment of variables (ex: `a = b`)",
        "",
        "Try using a few well known constants, like `pi` and `e`. "
        "`ans` is a special variable that is always the last result.",
        "",
        "Negative numbers can only be written as literals (ex: `-3`), `-(1 + 2)` is not supported!",
    ]
)


def render(value: Value) -> Optional[str]:
    """Text to display for ``value``; ``None`` means nothing should be displayed"""
    if isinstance(value, Integer):
        return str(value.v)
    elif isinstance(value, Float):
        return repr(value.v)
    elif isinstance(value, Error):
        return value.message
    elif isinstance(value, Info):
        return HELP_TEXT if value.kind is InfoKind.HELP else ABOUT_TEXT
    elif isinstance(value, Nil):
        return None
    else:
        raise TypeError(f"Can't render {value.type_name()}")
