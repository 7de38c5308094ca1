import logging
import math
from typing import Optional

from linecalc.value import Float, Value, is_numeric

logger = logging.getLogger(__name__)

ANS = "ans"


def _builtin_constants() -> dict[str, Value]:
    return {
        "pi": Float(math.pi),
        "π": Float(math.pi),
        "e": Float(math.e),
    }


class Environment:
    """Session-wide symbol table. Built-in constants are ordinary entries and may be overwritten."""

    def __init__(self) -> None:
        self.variables: dict[str, Value] = _builtin_constants()

    def lookup(self, name: str) -> Optional[Value]:
        return self.variables.get(name)

    def assign(self, name: str, value: Value) -> None:
        logger.debug("%s = %s", name, value)
        self.variables[name] = value

    def set_ans(self, value: Value) -> None:
        if is_numeric(value):
            self.assign(ANS, value)
