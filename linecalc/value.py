import abc
import enum
from dataclasses import dataclass
from typing import Callable

from linecalc.utils import PrintableEnum


class Value(abc.ABC):
    @classmethod
    @abc.abstractmethod
    def type_name(cls) -> str:
        ...


BinaryOperationImpl = Callable[[Value, Value], Value]


@dataclass(frozen=True)
class Integer(Value):
    v: int

    @classmethod
    def type_name(cls) -> str:
        return "Integer"


@dataclass(frozen=True)
class Float(Value):
    v: float

    @classmethod
    def type_name(cls) -> str:
        return "Float"


@dataclass(frozen=True)
class Error(Value):
    message: str

    @classmethod
    def type_name(cls) -> str:
        return "Error"


class InfoKind(PrintableEnum):
    HELP = enum.auto()
    ABOUT = enum.auto()


@dataclass(frozen=True)
class Info(Value):
    kind: InfoKind

    @classmethod
    def type_name(cls) -> str:
        return "Info"


@dataclass(frozen=True)
class Nil(Value):
    @classmethod
    def type_name(cls) -> str:
        return "Nil"


def is_numeric(value: Value) -> bool:
    return isinstance(value, (Integer, Float))
