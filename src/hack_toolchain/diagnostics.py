'''
clase Diagnostic y helpers (línea/columna, tipos de error)
'''

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

# Tipos de error reconocidos por el ensamblador y el traductor VM
ErrorKind = Literal[
    "MalformedLine",
    "UnknownMnemonic",
    "UndeclaredReservedSymbolCollision",
    "DuplicateLabel",
    "ValueOutOfRange",
    "UnresolvedReference",
    "NamespaceCollision",
]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores, advertencias y notas, con ubicación opcional (archivo, línea y columna),
    un mensaje de ayuda (pista) y el tipo de error cuando aplica.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def located(self, *, line: int | None = None, col: int | None = None,
                file: str | None = None) -> "Diagnostic":
        """Copia del diagnóstico completando la ubicación que aún no tenga."""
        return replace(
            self,
            line=self.line if self.line is not None else line,
            col=self.col if self.col is not None else col,
            file=self.file if self.file is not None else file,
        )

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
        if self.kind:
            sev += f"[{self.kind}]"
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

class HackError(Exception):
    """Error fatal de una línea; transporta el diagnóstico que lo describe."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None,
          kind: ErrorKind | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file, kind)

def warning(message: str, *, line: int | None = None, col: int | None = None,
            file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo advertencia."""
    return Diagnostic("advertencia", message, line, col, hint, file)

def has_errors(diags) -> bool:
    return any(d.is_error for d in diags)
