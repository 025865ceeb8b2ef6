# src/hack_toolchain/linker.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from .ast import Label, AInstruction, CInstruction, Node
from .symtab import SymbolTable
from .utils import ADDRESS_LIMIT
from .diagnostics import ToolchainError, TooManyInstructions

# ---------- Resultados de la pasada 1 ----------

@dataclass(frozen=True)
class LinkResult:
    symtab: SymbolTable
    text_size: int        # número de instrucciones reales (palabras de ROM)

# ---------- Pasada 1 (etiquetas) ----------

def first_pass(
    nodes: List[Node],
    *,
    symtab: Optional[SymbolTable] = None,
    filename: str | None = None,
) -> LinkResult:
    """Registra cada etiqueta con la dirección de la siguiente instrucción real.

    Las etiquetas no ocupan ROM; cada instrucción A o C ocupa una palabra.
    """
    if symtab is None:
        symtab = SymbolTable()
    counter = 0

    for n in nodes:
        try:
            if isinstance(n, Label):
                symtab.bind_label(n.name, counter)
            elif isinstance(n, (AInstruction, CInstruction)):
                if counter + 1 >= ADDRESS_LIMIT:
                    raise TooManyInstructions(
                        f"No se pueden emitir {ADDRESS_LIMIT} instrucciones o más"
                    )
                counter += 1
            else:
                raise TypeError(f"Nodo de AST desconocido en linker: {n!r}")
        except ToolchainError as ex:
            raise ex.at(line=n.line or None, file=filename, source=str(n))

    return LinkResult(symtab=symtab, text_size=counter)
