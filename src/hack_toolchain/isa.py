'''
tabla formal Hack (comp, jump, símbolos predefinidos)
'''

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from .ast import Comp, Jump
from .diagnostics import ParseError

# Tabla comp: sintaxis -> (a, c1..c6). La primera forma registrada de cada
# par de bits es la canónica (la que devuelve el decodificador).
COMP: Dict[str, Comp] = {}
CANONICAL: Dict[Tuple[int, int], Comp] = {}

def _add(expr: str, a: int, c: int, aliases: Optional[List[str]] = None):
    entry = Comp(a_bit=a, c_bits=c, expr=expr)
    COMP[expr] = entry
    CANONICAL[(a, c)] = entry
    for alias in aliases or []:
        COMP[alias] = entry

# Constantes
_add("0",   0, 0b101010)
_add("1",   0, 0b111111)
_add("-1",  0, 0b111010)

# Registro solo (a=0 usa A, a=1 usa M)
_add("D",   0, 0b001100)
_add("A",   0, 0b110000)
_add("M",   1, 0b110000)
_add("!D",  0, 0b001101)
_add("!A",  0, 0b110001)
_add("!M",  1, 0b110001)
_add("-D",  0, 0b001111)
_add("-A",  0, 0b110011)
_add("-M",  1, 0b110011)

# Incremento / decremento
_add("D+1", 0, 0b011111)
_add("A+1", 0, 0b110111)
_add("M+1", 1, 0b110111)
_add("D-1", 0, 0b001110)
_add("A-1", 0, 0b110010)
_add("M-1", 1, 0b110010)

# Binarias (las conmutativas aceptan ambos órdenes de operandos)
_add("D+A", 0, 0b000010, ["A+D"])
_add("D+M", 1, 0b000010, ["M+D"])
_add("D-A", 0, 0b010011)
_add("D-M", 1, 0b010011)
_add("A-D", 0, 0b000111)
_add("M-D", 1, 0b000111)
_add("D&A", 0, 0b000000, ["A&D"])
_add("D&M", 1, 0b000000, ["M&D"])
_add("D|A", 0, 0b010101, ["A|D"])
_add("D|M", 1, 0b010101, ["M|D"])

# Tabla jump: mnemónico -> Jump (ausente = NEVER)
JUMP: Dict[str, Jump] = {
    "JGT": Jump.GT,
    "JEQ": Jump.EQ,
    "JGE": Jump.GE,
    "JLT": Jump.LT,
    "JNE": Jump.NE,
    "JLE": Jump.LE,
    "JMP": Jump.ALWAYS,
}

# Símbolos predefinidos de la plataforma
PREDEFINED: Dict[str, int] = {
    **{f"R{i}": i for i in range(16)},
    "SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
    "SCREEN": 0x4000,
    "KBD": 0x6000,
}

def comp(expr: str) -> Comp:
    """Devuelve la entrada comp para una expresión de la tabla."""
    if expr not in COMP:
        raise ParseError(f"Expresión comp no reconocida: {expr!r}")
    return COMP[expr]

def comp_from_bits(a_bit: int, c_bits: int) -> Comp:
    """Entrada canónica para un par (a, c); sólo existen los pares de la tabla."""
    key = (a_bit, c_bits)
    if key not in CANONICAL:
        raise ParseError(f"Combinación comp inválida: a={a_bit} c={c_bits:06b}")
    return CANONICAL[key]

def jump(mnemonic: str) -> Jump:
    """Devuelve el Jump para un mnemónico JGT/JEQ/JGE/JLT/JNE/JLE/JMP."""
    if mnemonic not in JUMP:
        raise ParseError(
            f"Salto desconocido: {mnemonic!r}",
            hint="uno de " + ", ".join(JUMP),
        )
    return JUMP[mnemonic]
