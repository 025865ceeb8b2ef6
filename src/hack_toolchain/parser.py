# src/hack_toolchain/parser.py
from __future__ import annotations
import re
from typing import Iterable, List, Tuple

from .lexer import symbol_problem, split_c_fields
from .ast import Label, AInstruction, CInstruction, Dest, Jump, Node
from .isa import comp as isa_comp, jump as isa_jump
from .utils import ADDRESS_LIMIT
from .diagnostics import ParseError, ToolchainError, ValueOutOfRange

DEC_IMM_RE = re.compile(r"^[0-9]+$")
DIGITS = "0123456789"

def _check_symbol(name: str) -> str:
    problem = symbol_problem(name)
    if problem:
        raise ParseError(f"Símbolo inválido: {problem}")
    return name

def _parse_label(line: str, lineno: int) -> Label:
    if not line.endswith(")"):
        raise ParseError(f"La etiqueta debe terminar en ')': {line!r}")
    return Label(name=_check_symbol(line[1:-1]), line=lineno)

def _parse_a(line: str, lineno: int) -> AInstruction:
    word = line[1:]
    if word and word[0] in DIGITS:
        if not DEC_IMM_RE.match(word):
            raise ParseError(f"Literal de instrucción A inválido: {line!r}")
        value = int(word)
        if value >= ADDRESS_LIMIT:
            raise ValueOutOfRange(
                f"Literal de instrucción A fuera de rango: {value}",
                hint=f"debe ser menor que {ADDRESS_LIMIT}",
            )
        return AInstruction(value, line=lineno)
    return AInstruction(_check_symbol(word), line=lineno)

def _parse_dest(dest: str) -> Dest:
    if not dest:
        raise ParseError("Campo dest vacío")
    for ch in dest:
        if ch not in "ADM":
            raise ParseError(f"Carácter dest inválido {ch!r} en {dest!r}")
    if len(set(dest)) != len(dest):
        raise ParseError(f"Carácter repetido en dest {dest!r}")
    return Dest(a="A" in dest, d="D" in dest, m="M" in dest)

def _parse_c(line: str, lineno: int) -> CInstruction:
    dest_s, comp_s, jump_s = split_c_fields(line)
    dest = _parse_dest(dest_s) if dest_s is not None else Dest()
    jump = isa_jump(jump_s) if jump_s is not None else Jump.NEVER
    return CInstruction(comp=isa_comp(comp_s), dest=dest, jump=jump, line=lineno)

def parse_line(line: str, *, lineno: int = 0) -> Node:
    """Convierte una línea ya recortada y sin comentarios en Label o instrucción.

    Reglas:
      - '(NAME)'         -> Label
      - '@123' / '@sym'  -> AInstruction (el símbolo queda sin resolver)
      - 'dest=comp;jump' -> CInstruction (dest y jump opcionales)
    """
    if not line:
        raise ParseError("Línea vacía")
    if line.startswith("("):
        return _parse_label(line, lineno)
    if line.startswith("@"):
        return _parse_a(line, lineno)
    return _parse_c(line, lineno)

def parse(lines: Iterable[Tuple[int, str]], *, filename: str | None = None) -> List[Node]:
    """Parsea una secuencia numerada (lineno, línea); el primer error aborta.

    El error se relanza con archivo, número de línea y texto de la línea.
    """
    nodes: List[Node] = []
    for lineno, line in lines:
        try:
            nodes.append(parse_line(line, lineno=lineno))
        except ToolchainError as ex:
            raise ex.at(line=lineno, file=filename, source=line)
    return nodes
