# src/hack_toolchain/vm_parser.py
from __future__ import annotations
from typing import List, Optional, Tuple

from .lexer import strip_comment, split_fields, is_literal
from .ast import Arithmetic, Push, Pop, VmCommand
from .isa import ARITHMETIC_OPS, SEGMENTS
from .diagnostics import Diagnostic, HackError, error

def parse_command(raw: str, lineno: int = 0) -> Optional[VmCommand]:
    """Clasifica una línea VM. None si es vacía o comentario; HackError si está mal formada."""
    core = strip_comment(raw)
    if not core:
        return None
    fields = split_fields(core)
    if len(fields) > 3:
        raise HackError(error(f"Demasiados campos: '{core}'", kind="MalformedLine"))
    op, args = fields[0], fields[1:]

    if op in ARITHMETIC_OPS:
        if args:
            raise HackError(error(f"'{op}' no admite operandos", kind="MalformedLine"))
        return Arithmetic(op, line=lineno)

    if op not in ("push", "pop"):
        raise HackError(error(f"Comando VM desconocido: '{op}'", kind="UnknownMnemonic"))
    if len(args) != 2:
        raise HackError(error(f"'{op}' espera segmento e índice", kind="MalformedLine"))
    segment, index = args
    if segment not in SEGMENTS:
        raise HackError(error(f"Segmento desconocido: '{segment}'", kind="UnknownMnemonic"))
    if not is_literal(index):
        raise HackError(error(f"Índice no numérico: '{index}'", kind="MalformedLine"))
    if op == "pop" and segment == "constant":
        raise HackError(error("pop no admite el segmento constant", kind="MalformedLine"))

    cls = Push if op == "push" else Pop
    return cls(segment, int(index), line=lineno)

def parse(text: str, *, filename: Optional[str] = None) -> Tuple[List[VmCommand], List[Diagnostic]]:
    """
    Devuelve (commands, diagnostics) donde commands es una lista de
    Arithmetic(op), Push(segment, index) y Pop(segment, index).

    Comentarios '//' y líneas vacías se ignoran.
    """
    commands: List[VmCommand] = []
    diags: List[Diagnostic] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        try:
            cmd = parse_command(raw, lineno)
        except HackError as ex:
            diags.append(ex.diagnostic.located(line=lineno, file=filename))
            continue
        if cmd is not None:
            commands.append(cmd)

    return commands, diags
