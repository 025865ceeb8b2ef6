'''
dataclases de AST para ensamblador Hack (Label, AInstruction, CInstruction, Dest, Comp, Jump)
'''

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .utils import is_address
from .diagnostics import ValueOutOfRange

# ---- Campos de una instrucción C ----

@dataclass(frozen=True)
class Dest:
    """Destinos del resultado de la ALU: registro A, registro D y memoria M (=RAM[A])."""
    a: bool = False
    d: bool = False
    m: bool = False

    @property
    def bits(self) -> int:
        return (self.a << 2) | (self.d << 1) | int(self.m)

    @classmethod
    def from_bits(cls, bits: int) -> "Dest":
        return cls(a=bool(bits & 0b100), d=bool(bits & 0b010), m=bool(bits & 0b001))

    def __bool__(self) -> bool:
        return self.a or self.d or self.m

    def __str__(self) -> str:
        return ("A" if self.a else "") + ("D" if self.d else "") + ("M" if self.m else "")

@dataclass(frozen=True)
class Comp:
    """Cálculo de la ALU: par (a_bit, c_bits) tomado de la tabla de isa.py.

    No se construye a mano: usar isa.comp(expr) o isa.comp_from_bits(a, c).
    La igualdad compara sólo los bits, así 'D+A' == 'A+D'.
    """
    a_bit: int
    c_bits: int                       # 6 bits, c1 es el más significativo
    expr: str = field(default="", compare=False)

    @property
    def bits(self) -> int:
        return (self.a_bit << 6) | self.c_bits

    def __str__(self) -> str:
        return self.expr

class Jump(Enum):
    """Condición de salto; el valor es el código de 3 bits."""
    NEVER = 0b000
    GT = 0b001
    EQ = 0b010
    GE = 0b011
    LT = 0b100
    NE = 0b101
    LE = 0b110
    ALWAYS = 0b111

    @property
    def mnemonic(self) -> str:
        return "" if self is Jump.NEVER else ("JMP" if self is Jump.ALWAYS else "J" + self.name)

# ---- Nodos a nivel de fuente ----

@dataclass(frozen=True)
class Label:
    """Pseudo-instrucción '(NAME)': nombra la dirección de la siguiente instrucción."""
    name: str
    line: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"({self.name})"

@dataclass(frozen=True)
class AInstruction:
    """'@value': carga una dirección/constante de 15 bits, o un símbolo aún sin resolver."""
    value: Union[int, str]
    line: int = field(default=0, compare=False)

    def __post_init__(self):
        if isinstance(self.value, int) and not is_address(self.value):
            raise ValueOutOfRange(f"Dirección fuera de rango (0..32767): {self.value}")

    @property
    def is_resolved(self) -> bool:
        return isinstance(self.value, int)

    def __str__(self) -> str:
        return f"@{self.value}"

@dataclass(frozen=True)
class CInstruction:
    """'dest=comp;jump'."""
    comp: Comp
    dest: Dest = Dest()
    jump: Jump = Jump.NEVER
    line: int = field(default=0, compare=False)

    def __str__(self) -> str:
        s = str(self.comp)
        if self.dest:
            s = f"{self.dest}={s}"
        if self.jump is not Jump.NEVER:
            s = f"{s};{self.jump.mnemonic}"
        return s

Instruction = Union[AInstruction, CInstruction]
Node = Union[Label, AInstruction, CInstruction]
