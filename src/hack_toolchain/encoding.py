# src/hack_toolchain/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .ast import Label, AInstruction, CInstruction, Dest, Jump, Instruction, Node
from .isa import comp_from_bits
from .symtab import SymbolTable
from .utils import u16, split_bits, ADDR_MASK
from .diagnostics import ParseError, ToolchainError, UnresolvedSymbol, ValueOutOfRange

# ---------------- Resultados de codificación ----------------

@dataclass(frozen=True)
class Encoded:
    word: int     # u16
    pc: int       # dirección de ROM de esta instrucción
    line: int

@dataclass(frozen=True)
class EncodeResult:
    words: List[Encoded]

# ---------------- Helpers de empaquetado de bits ----------------

C_PREFIX = 0b111

# Campos de una instrucción C, (hi, lo) inclusivos
C_FIELDS = ((15, 13), (12, 12), (11, 6), (5, 3), (2, 0))

def _pack_A(value: int) -> int:
    return value & ADDR_MASK

def _pack_C(a: int, c: int, dest: int, jump: int) -> int:
    return u16((C_PREFIX << 13) |
               ((a & 0x1) << 12) |
               ((c & 0x3F) << 6) |
               ((dest & 0x7) << 3) |
               (jump & 0x7))

# ---------------- Instrucción suelta ----------------

def encode_instruction(ins: Instruction) -> int:
    """Codifica una instrucción ya resuelta en una palabra de 16 bits."""
    if isinstance(ins, AInstruction):
        if not ins.is_resolved:
            raise UnresolvedSymbol(f"Símbolo sin resolver: {ins.value}")
        return _pack_A(ins.value)
    if isinstance(ins, CInstruction):
        return _pack_C(ins.comp.a_bit, ins.comp.c_bits, ins.dest.bits, ins.jump.value)
    raise TypeError(f"No es una instrucción: {ins!r}")

def decode_instruction(word: int) -> Instruction:
    """Inversa estructural de encode_instruction (comp en forma canónica)."""
    if not 0 <= word <= 0xFFFF:
        raise ValueOutOfRange(f"Palabra fuera de 16 bits: {word}")
    if word >> 15 == 0:
        return AInstruction(word & ADDR_MASK)
    prefix, a, c, dest, jump = split_bits(word, C_FIELDS)
    if prefix != C_PREFIX:
        raise ParseError(f"Instrucción C con prefijo inválido: {prefix:03b}")
    return CInstruction(comp=comp_from_bits(a, c), dest=Dest.from_bits(dest), jump=Jump(jump))

def to_asm(ins: Instruction) -> str:
    """Texto ensamblador canónico de una instrucción."""
    return str(ins)

# ---------------- Pasada 2 ----------------

def encode(
    nodes: List[Node],
    symtab: SymbolTable,
    *,
    filename: str | None = None,
) -> EncodeResult:
    """Resuelve símbolos (reservando variables nuevas) y codifica en orden."""
    words: List[Encoded] = []
    pc = 0

    for n in nodes:
        if isinstance(n, Label):
            # no ocupa ROM; ya fue registrada en first_pass
            continue
        try:
            ins = n
            if isinstance(n, AInstruction) and not n.is_resolved:
                addr = symtab.lookup(n.value)
                if addr is None:
                    addr = symtab.bind_variable(n.value)
                ins = AInstruction(addr, line=n.line)
            words.append(Encoded(word=encode_instruction(ins), pc=pc, line=n.line))
        except ToolchainError as ex:
            raise ex.at(line=n.line or None, file=filename, source=str(n))
        pc += 1

    return EncodeResult(words=words)
