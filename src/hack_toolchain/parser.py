# src/hack_toolchain/parser.py
from __future__ import annotations
from typing import List, Tuple, Optional

from .lexer import (
    strip_comment,
    line_kind,
    check_symbol,
    is_literal,
    filter_compute,
    split_compute,
)
from .ast import AInstruction, CInstruction, Label, Literal, Sym, Node
from .diagnostics import error, Diagnostic

def _parse_address(core: str, line: int, col: int) -> AInstruction:
    # el operando termina en el primer espacio
    fields = core[1:].split(None, 1)
    if not fields or core[1:2].isspace():
        raise ValueError("'@' sin operando")
    operand = fields[0]
    if is_literal(operand):
        return AInstruction(Literal(int(operand)), line=line, col=col)
    return AInstruction(Sym(check_symbol(operand)), line=line, col=col)

def _parse_label(core: str, line: int, col: int) -> Label:
    if not core.endswith(")"):
        raise ValueError(f"etiqueta sin ')' de cierre: '{core}'")
    name = core[1:-1].strip()
    return Label(check_symbol(name), line=line, col=col)

def _parse_compute(core: str, line: int, col: int) -> CInstruction:
    dest, comp, jump = split_compute(filter_compute(core))
    return CInstruction(comp=comp, dest=dest, jump=jump, line=line, col=col)

def _column(raw: str) -> int:
    return len(raw) - len(raw.lstrip()) + 1

def parse_line(raw: str, lineno: int = 0) -> Optional[Node]:
    """Clasifica una línea cruda. Devuelve None si es vacía o solo comentario.

    Lanza ValueError si la línea no encaja en ninguna forma reconocida.
    """
    core = strip_comment(raw)
    if not core:
        return None
    col = _column(raw)
    kind = line_kind(core)
    if kind == "A":
        return _parse_address(core, lineno, col)
    if kind == "L":
        return _parse_label(core, lineno, col)
    return _parse_compute(core, lineno, col)

def parse(text: str, *, filename: Optional[str] = None) -> Tuple[List[Node], List[Diagnostic]]:
    """
    Devuelve (nodes, diagnostics) donde nodes es una lista de:
      - AInstruction(target, line, col)        '@123' o '@SIMBOLO'
      - Label(name, line, col)                 '(SIMBOLO)'
      - CInstruction(comp, dest, jump, ...)    'dest=comp;jump'

    Reglas:
      - Comentarios: '//' hasta fin de línea.
      - El primer carácter decide el tipo: '@' dirección, '(' etiqueta, resto cómputo.
      - Una línea mal formada produce un error MalformedLine y no genera nodo.
    """
    nodes: List[Node] = []
    diags: List[Diagnostic] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        try:
            node = parse_line(raw, lineno)
        except ValueError as ex:
            diags.append(error(f"Línea mal formada: {ex}", line=lineno, col=_column(raw),
                               file=filename, kind="MalformedLine"))
            continue
        if node is not None:
            nodes.append(node)

    return nodes, diags
