# src/hack_toolchain/vm_parser.py
from __future__ import annotations
import re
from typing import Iterable, List, Tuple

from .commands import Arithmetic, ArithOp, Command, Pop, Push, Segment
from .utils import ADDRESS_LIMIT
from .diagnostics import ParseError, ToolchainError, UnknownCommand, ValueOutOfRange

DEC_IMM_RE = re.compile(r"^[0-9]+$")

NULLARY = {op.value: op for op in ArithOp}
SEGMENTS = {seg.value: seg for seg in Segment}

def _parse_segment(word: str) -> Segment:
    if word not in SEGMENTS:
        raise ParseError(f"Segmento desconocido: {word!r}", hint="uno de " + ", ".join(SEGMENTS))
    return SEGMENTS[word]

def _parse_index(word: str) -> int:
    if not DEC_IMM_RE.match(word):
        raise ParseError(f"Índice inválido: {word!r}", hint="entero decimal no negativo")
    value = int(word)
    if value >= ADDRESS_LIMIT:
        raise ValueOutOfRange(f"Índice fuera de rango: {value}", hint=f"debe ser menor que {ADDRESS_LIMIT}")
    return value

def parse_command(line: str, *, lineno: int = 0) -> Command:
    """Convierte una línea VM ya recortada y sin comentarios en un Command.

    'pop constant N' se rechaza aquí (IllegalPop), antes de generar código.
    """
    words = line.split()
    if not words:
        raise ParseError("Línea vacía")
    head, args = words[0], words[1:]

    if head in NULLARY:
        if args:
            raise ParseError(f"'{head}' no lleva argumentos: {line!r}")
        return Arithmetic(NULLARY[head], line=lineno)

    if head in ("push", "pop"):
        if len(args) != 2:
            raise ParseError(f"{head} espera 2 argumentos (segmento e índice): {line!r}")
        segment = _parse_segment(args[0])
        index = _parse_index(args[1])
        if head == "push":
            return Push(segment, index, line=lineno)
        return Pop(segment, index, line=lineno)

    raise UnknownCommand(f"Comando no reconocido: {head!r}")

def parse(lines: Iterable[Tuple[int, str]], *, filename: str | None = None) -> List[Command]:
    """Parsea una secuencia numerada (lineno, línea); el primer error aborta."""
    commands: List[Command] = []
    for lineno, line in lines:
        try:
            commands.append(parse_command(line, lineno=lineno))
        except ToolchainError as ex:
            raise ex.at(line=lineno, file=filename, source=line)
    return commands
