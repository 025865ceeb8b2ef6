from __future__ import annotations
import re
from typing import Iterable, List, Optional, Tuple

COMMENT = "//"

# Letras, dígitos, '_', '.', '$' y ':'; nunca empieza por dígito
SYMBOL_RE = re.compile(r"^[A-Za-z_.$:][A-Za-z0-9_.$:]*$")
SYMBOL_CHARS_RE = re.compile(r"[^A-Za-z0-9_.$:]")

def strip_comment(line: str) -> str:
    """Remove everything after the first '//' and trim."""
    idx = line.find(COMMENT)
    if idx >= 0:
        line = line[:idx]
    return line.strip()

def clean_lines(text: str) -> List[Tuple[int, str]]:
    """Return (lineno, line) for every non-blank line, comments removed.

    Line numbers are 1-based and refer to the original text.
    """
    out = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        core = strip_comment(raw)
        if core:
            out.append((lineno, core))
    return out

def number_lines(lines: Iterable[str]) -> List[Tuple[int, str]]:
    """Number an already clean sequence of lines (1-based)."""
    return list(enumerate(lines, start=1))

def symbol_problem(name: str) -> Optional[str]:
    """Return a description of what makes 'name' an invalid symbol, or None."""
    if not name:
        return "símbolo vacío"
    m = SYMBOL_CHARS_RE.search(name)
    if m:
        return f"carácter inválido {m.group(0)!r} en símbolo {name!r}"
    if name[0] in "0123456789":
        return f"los símbolos no pueden empezar por dígito: {name!r}"
    return None

def is_symbol(name: str) -> bool:
    return SYMBOL_RE.match(name) is not None

def split_c_fields(line: str) -> Tuple[Optional[str], str, Optional[str]]:
    """Split 'dest=comp;jump' into (dest, comp, jump); absent parts are None."""
    dest: Optional[str] = None
    jump: Optional[str] = None
    rest = line
    if "=" in rest:
        dest, rest = rest.split("=", 1)
    if ";" in rest:
        rest, jump = rest.split(";", 1)
    return dest, rest, jump
