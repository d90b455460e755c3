# src/hack_toolchain/linker.py
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .ast import AInstruction, CInstruction, Label, Sym, Node
from .isa import PREDEFINED_SYMBOLS, VARIABLE_BASE, SCREEN
from .utils import MAX_ADDRESS
from .diagnostics import Diagnostic, error, warning

# ---------- Resultado de la resolución de símbolos ----------

@dataclass(frozen=True)
class LinkResult:
    symtab: Mapping[str, int]       # solo lectura durante la codificación
    labels: Mapping[str, int]
    variables: Mapping[str, int]
    text_size: int                  # número de instrucciones reales
    diagnostics: List[Diagnostic]

# ---------- Pasada 1 (etiquetas) ----------

def first_pass(
    nodes: List[Node],
    *,
    filename: Optional[str] = None,
) -> Tuple[Dict[str, int], Dict[str, int], int, List[Diagnostic]]:
    """Liga cada etiqueta al índice de la siguiente instrucción real.

    Devuelve (symtab, labels, text_size, diagnostics). La tabla parte de los
    símbolos predefinidos.
    """
    symtab: Dict[str, int] = dict(PREDEFINED_SYMBOLS)
    labels: Dict[str, int] = {}
    diags: List[Diagnostic] = []
    pc = 0

    for n in nodes:
        if isinstance(n, Label):
            name = n.name
            if name in PREDEFINED_SYMBOLS:
                diags.append(error(f"La etiqueta redefine un símbolo predefinido: {name}",
                                   line=n.line, col=n.col, file=filename,
                                   kind="UndeclaredReservedSymbolCollision"))
            elif name in labels:
                diags.append(error(f"Etiqueta redefinida: {name}", line=n.line, col=n.col,
                                   file=filename, kind="DuplicateLabel",
                                   hint=f"declarada antes en la instrucción {labels[name]}"))
            else:
                labels[name] = pc
                symtab[name] = pc
            continue
        if isinstance(n, (AInstruction, CInstruction)):
            pc += 1
            continue
        raise TypeError(f"Nodo desconocido en la pasada 1: {n!r}")

    return symtab, labels, pc, diags

# ---------- Pasada 2 (variables) ----------

def second_pass(
    nodes: List[Node],
    symtab: Dict[str, int],
    *,
    var_base: int = VARIABLE_BASE,
    filename: Optional[str] = None,
) -> Tuple[Dict[str, int], List[Diagnostic]]:
    """Asigna direcciones consecutivas desde var_base a cada símbolo nuevo,
    en orden de primer uso. Modifica symtab y devuelve (variables, diagnostics)."""
    variables: Dict[str, int] = {}
    diags: List[Diagnostic] = []
    next_addr = var_base
    warned_screen = False

    for n in nodes:
        if not isinstance(n, AInstruction) or not isinstance(n.target, Sym):
            continue
        name = n.target.name
        if name in symtab:
            continue
        if next_addr > MAX_ADDRESS:
            diags.append(error(f"Sin espacio para la variable {name}", line=n.line, col=n.col,
                               file=filename, kind="ValueOutOfRange"))
            continue
        if next_addr >= SCREEN and not warned_screen:
            diags.append(warning(f"La variable {name} se asigna en la memoria de pantalla ({next_addr})",
                                 line=n.line, col=n.col, file=filename))
            warned_screen = True
        symtab[name] = next_addr
        variables[name] = next_addr
        next_addr += 1

    return variables, diags

def link(
    nodes: List[Node],
    *,
    var_base: int = VARIABLE_BASE,
    filename: Optional[str] = None,
) -> LinkResult:
    """Pasada 1 completa antes de la pasada 2: un nombre usado antes de su
    declaración como etiqueta no debe tomarse por variable."""
    symtab, labels, text_size, diags = first_pass(nodes, filename=filename)
    variables, diags2 = second_pass(nodes, symtab, var_base=var_base, filename=filename)
    return LinkResult(
        symtab=MappingProxyType(symtab),
        labels=MappingProxyType(labels),
        variables=MappingProxyType(variables),
        text_size=text_size,
        diagnostics=diags + diags2,
    )
