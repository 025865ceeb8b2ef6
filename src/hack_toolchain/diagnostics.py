'''
clase Diagnostic, helpers (línea/columna) y jerarquía de errores del toolchain
'''

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores, advertencias y notas, con ubicación opcional (archivo, línea y columna),
    el texto de la línea que falló y un mensaje de ayuda (pista) para orientar la corrección.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None
    source: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        if self.source is not None:
            core += f"\n    {self.source}"
        return loc + core

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file)

# ---------- Errores ----------

class ToolchainError(ValueError):
    """Error que aborta la ejecución completa (ensamblado o traducción).

    Cada excepción lleva su Diagnostic; la ubicación se añade en el pipeline con `at()`.
    """

    def __init__(self, message: str, *, hint: str | None = None):
        super().__init__(message)
        self.diagnostic = error(message, hint=hint)

    def at(self, *, line: int | None = None, file: str | None = None,
           source: str | None = None) -> "ToolchainError":
        """Completa la ubicación del diagnóstico (sin pisar la que ya tenga) y devuelve self."""
        d = self.diagnostic
        self.diagnostic = replace(
            d,
            line=d.line if d.line is not None else line,
            file=d.file if d.file is not None else file,
            source=d.source if d.source is not None else source,
        )
        return self

    def __str__(self) -> str:
        return str(self.diagnostic)

# Errores sintácticos: línea mal formada, símbolo inválido, literal ilegible
class ParseError(ToolchainError):
    pass

class UnknownCommand(ParseError):
    pass

# Errores semánticos: la línea se entiende pero no se puede cumplir
class SemanticError(ToolchainError):
    pass

class DuplicateSymbol(SemanticError):
    pass

class AddressSpaceExhausted(SemanticError):
    pass

class TooManyInstructions(SemanticError):
    pass

class ValueOutOfRange(SemanticError):
    pass

class InvalidSegmentIndex(SemanticError):
    pass

class IllegalPop(SemanticError):
    pass

class UnresolvedSymbol(SemanticError):
    pass

# Errores de E/S del entorno (lectura/escritura de archivos)
class ResourceError(ToolchainError):
    pass
