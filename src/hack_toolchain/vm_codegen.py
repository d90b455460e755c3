'''
traducción de comandos VM a ensamblador Hack (push/pop por segmento y aritmética)

Convención de pila: SP (RAM[0]) apunta a la primera celda libre; la cima está en
RAM[SP-1]. Los comparadores dejan -1 (verdadero) o 0 (falso).
'''

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .ast import Arithmetic, Push, Pop, VmCommand
from .isa import BASE_POINTERS, POINTER_REGS, SCRATCH_REG, TEMP_BASE, TEMP_SIZE
from .utils import MAX_ADDRESS
from .diagnostics import Diagnostic, HackError, error

# ---------------- Estado por archivo ----------------

@dataclass(frozen=True)
class TranslatorState:
    """Estado de la traducción de UN archivo .vm.

    - file_stem: prefijo de los símbolos static y de las etiquetas generadas
    - label_count: siguiente sufijo libre para las etiquetas de comparación
    """
    file_stem: str
    label_count: int = 0

# ---------------- Secuencias comunes ----------------

PUSH_D = ["@SP", "A=M", "M=D", "@SP", "M=M+1"]
POP_D = ["@SP", "AM=M-1", "D=M"]

_BINARY = {"add": "M=D+M", "sub": "M=M-D", "and": "M=D&M", "or": "M=D|M"}
_UNARY = {"neg": "M=-M", "not": "M=!M"}
_COMPARE = {"eq": "JEQ", "gt": "JGT", "lt": "JLT"}

def _check_index(segment: str, index: int) -> None:
    limits = {"temp": TEMP_SIZE - 1, "pointer": len(POINTER_REGS) - 1}
    hi = limits.get(segment, MAX_ADDRESS)
    if not 0 <= index <= hi:
        raise HackError(error(f"Índice fuera de rango para {segment} (0..{hi}): {index}",
                              kind="ValueOutOfRange"))

def _direct_symbol(segment: str, index: int, file_stem: str) -> str:
    """Símbolo de los segmentos de dirección fija (static, temp, pointer)."""
    if segment == "static":
        return f"{file_stem}.{index}"
    if segment == "temp":
        return f"R{TEMP_BASE + index}"
    if segment == "pointer":
        return POINTER_REGS[index]
    raise HackError(error(f"Segmento desconocido: '{segment}'", kind="UnknownMnemonic"))

# ---------------- SegmentTranslator ----------------

def push_lines(segment: str, index: int, file_stem: str) -> List[str]:
    """push: deja el valor en RAM[SP] e incrementa SP."""
    _check_index(segment, index)
    if segment == "constant":
        load = [f"@{index}", "D=A"]
    elif segment in BASE_POINTERS:
        load = [f"@{BASE_POINTERS[segment]}", "D=M", f"@{index}", "A=D+A", "D=M"]
    else:
        load = [f"@{_direct_symbol(segment, index, file_stem)}", "D=M"]
    return load + PUSH_D

def pop_lines(segment: str, index: int, file_stem: str) -> List[str]:
    """pop: decrementa SP y escribe RAM[SP] en el destino."""
    _check_index(segment, index)
    if segment == "constant":
        raise HackError(error("pop no admite el segmento constant", kind="MalformedLine"))
    if segment in BASE_POINTERS:
        # la dirección destino se guarda en R13 antes de tocar la pila
        return ([f"@{BASE_POINTERS[segment]}", "D=M", f"@{index}", "D=D+A",
                 f"@{SCRATCH_REG}", "M=D"]
                + POP_D
                + [f"@{SCRATCH_REG}", "A=M", "M=D"])
    return POP_D + [f"@{_direct_symbol(segment, index, file_stem)}", "M=D"]

# ---------------- ArithmeticTranslator ----------------

def arithmetic_lines(op: str, state: TranslatorState) -> Tuple[TranslatorState, List[str]]:
    """Devuelve (nuevo_estado, líneas). Solo las comparaciones consumen etiquetas."""
    if op in _BINARY:
        return state, POP_D + ["A=A-1", _BINARY[op]]
    if op in _UNARY:
        return state, ["@SP", "A=M-1", _UNARY[op]]
    if op in _COMPARE:
        n = state.label_count
        tag = op.upper()
        true_label = f"{state.file_stem}.{tag}_TRUE.{n}"
        end_label = f"{state.file_stem}.{tag}_END.{n}"
        lines = POP_D + [
            "A=A-1",
            "D=M-D",
            f"@{true_label}",
            f"D;{_COMPARE[op]}",
            "@SP", "A=M-1", "M=0",
            f"@{end_label}",
            "0;JMP",
            f"({true_label})",
            "@SP", "A=M-1", "M=-1",
            f"({end_label})",
        ]
        return replace(state, label_count=n + 1), lines
    raise HackError(error(f"Operación aritmética desconocida: '{op}'", kind="UnknownMnemonic"))

# ---------------- Despacho ----------------

def translate_command(state: TranslatorState, cmd: VmCommand) -> Tuple[TranslatorState, List[str]]:
    """(estado, comando) -> (nuevo_estado, líneas). La primera línea lleva el comando como comentario."""
    if isinstance(cmd, Arithmetic):
        state, lines = arithmetic_lines(cmd.op, state)
    elif isinstance(cmd, Push):
        lines = push_lines(cmd.segment, cmd.index, state.file_stem)
    elif isinstance(cmd, Pop):
        lines = pop_lines(cmd.segment, cmd.index, state.file_stem)
    else:
        raise TypeError(f"Comando VM desconocido: {cmd!r}")
    return state, [f"{lines[0]} // {cmd}"] + lines[1:]

def translate(
    commands: List[VmCommand],
    state: TranslatorState,
    *,
    filename: Optional[str] = None,
) -> Tuple[TranslatorState, List[str], List[Diagnostic]]:
    out: List[str] = []
    diags: List[Diagnostic] = []
    for cmd in commands:
        try:
            state, lines = translate_command(state, cmd)
        except HackError as ex:
            diags.append(ex.diagnostic.located(line=cmd.line, file=filename))
            continue
        out.extend(lines)
    return state, out, diags
