'''
dataclases de comandos del lenguaje VM (Push, Pop, Arithmetic) y segmentos
'''

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .utils import is_address
from .diagnostics import IllegalPop, ValueOutOfRange

class Segment(Enum):
    """Segmentos de memoria virtual de la VM; el valor es su nombre en el fuente."""
    ARGUMENT = "argument"
    LOCAL = "local"
    STATIC = "static"
    CONSTANT = "constant"
    THIS = "this"
    THAT = "that"
    POINTER = "pointer"
    TEMP = "temp"

class ArithOp(Enum):
    """Operaciones sin argumentos sobre la pila."""
    ADD = "add"
    SUB = "sub"
    NEG = "neg"
    EQ = "eq"
    GT = "gt"
    LT = "lt"
    AND = "and"
    OR = "or"
    NOT = "not"

    @property
    def is_unary(self) -> bool:
        return self in (ArithOp.NEG, ArithOp.NOT)

    @property
    def is_comparison(self) -> bool:
        return self in (ArithOp.EQ, ArithOp.GT, ArithOp.LT)

# Registro base de los segmentos con indirección
BASE_REGISTER = {
    Segment.LOCAL: "LCL",
    Segment.ARGUMENT: "ARG",
    Segment.THIS: "THIS",
    Segment.THAT: "THAT",
}

def _check_index(index: int) -> None:
    if not is_address(index):
        raise ValueOutOfRange(f"Índice fuera de rango (0..32767): {index}")

@dataclass(frozen=True)
class Push:
    """push <segment> <index>"""
    segment: Segment
    index: int
    line: int = field(default=0, compare=False)

    def __post_init__(self):
        _check_index(self.index)

    def __str__(self) -> str:
        return f"push {self.segment.value} {self.index}"

@dataclass(frozen=True)
class Pop:
    """pop <segment> <index>; nunca sobre 'constant'."""
    segment: Segment
    index: int
    line: int = field(default=0, compare=False)

    def __post_init__(self):
        if self.segment is Segment.CONSTANT:
            raise IllegalPop(f"No se puede hacer pop al segmento constant: pop constant {self.index}")
        _check_index(self.index)

    def __str__(self) -> str:
        return f"pop {self.segment.value} {self.index}"

@dataclass(frozen=True)
class Arithmetic:
    op: ArithOp
    line: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return self.op.value

Command = Union[Push, Pop, Arithmetic]
