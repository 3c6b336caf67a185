'''
clase Diagnostic, tipos de error y helpers (línea/columna, texto fuente)
'''

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

class ErrorKind(Enum):
    """Categoría del problema, para que el llamador pueda filtrar o agrupar."""
    UNRECOGNIZED_LINE = "unrecognized-line"
    UNDEFINED_LABEL = "undefined-label"
    OPERAND_OUT_OF_RANGE = "operand-out-of-range"
    DUPLICATE_LABEL = "duplicate-label"
    PADDING_TOO_SHORT = "padding-too-short"

@dataclass(frozen=True)
class Diagnostic:
    """Un problema detectado durante el ensamblado.

    Abarca errores, advertencias y notas. Lleva la categoría (ErrorKind),
    ubicación opcional (archivo, línea, columna), el texto fuente literal de
    la línea afectada y una pista opcional para orientar la corrección.
    """
    severity: Severity
    message: str
    kind: Optional[ErrorKind] = None
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None
    text: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

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
        if self.text is not None:
            core += f"\n    {self.text}"
        return loc + core

def error(message: str, *, kind: ErrorKind | None = None, line: int | None = None,
          col: int | None = None, file: str | None = None, hint: str | None = None,
          text: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, kind, line, col, hint, file, text)

def warning(message: str, *, kind: ErrorKind | None = None, line: int | None = None,
            col: int | None = None, file: str | None = None, hint: str | None = None,
            text: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo advertencia."""
    return Diagnostic("advertencia", message, kind, line, col, hint, file, text)

def note(message: str, *, kind: ErrorKind | None = None, line: int | None = None,
         col: int | None = None, file: str | None = None, hint: str | None = None,
         text: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo nota."""
    return Diagnostic("nota", message, kind, line, col, hint, file, text)

def has_errors(diags: Iterable[Diagnostic]) -> bool:
    return any(d.is_error for d in diags)
