# src/hack_toolchain/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Mapping, Optional, Union

from .ast import AInstruction, CInstruction, Label, Literal, Sym, Node
from .isa import (
    C_PREFIX, comp_code, dest_code, jump_code,
    COMP_NAMES, DEST_NAMES, JUMP_NAMES,
)
from .utils import ADDR_BITS, MAX_ADDRESS, WORD_BITS, to_bin, from_bin
from .diagnostics import Diagnostic, HackError, error

# ---------------- Resultados de codificación ----------------

@dataclass(frozen=True)
class Encoded:
    word: str     # 16 caracteres '0'/'1'
    pc: int       # índice de esta instrucción
    line: Optional[int]
    col: Optional[int]

@dataclass(frozen=True)
class EncodeResult:
    words: List[Encoded]
    diagnostics: List[Diagnostic]

# ---------------- Codificadores puros ----------------

def encode_address(value: int) -> str:
    """'0' seguido de los 15 bits sin signo de value."""
    if not 0 <= value <= MAX_ADDRESS:
        raise HackError(error(f"Dirección fuera de rango (0..{MAX_ADDRESS}): {value}",
                              kind="ValueOutOfRange"))
    return "0" + to_bin(value, ADDR_BITS)

def encode_compute(dest: Optional[str], comp: str, jump: Optional[str]) -> str:
    """'111' + comp(7) + dest(3) + jump(3)."""
    try:
        c = comp_code(comp)
        d = dest_code(dest)
        j = jump_code(jump)
    except KeyError as ex:
        raise HackError(error(str(ex.args[0]), kind="UnknownMnemonic")) from None
    return C_PREFIX + c + d + j

def resolve(target: Union[Sym, Literal], symtab: Mapping[str, int]) -> int:
    if isinstance(target, Literal):
        return target.value
    addr = symtab.get(target.name)
    if addr is None:
        raise HackError(error(f"Símbolo sin resolver: {target.name}", kind="UnresolvedReference"))
    return addr

def encode_instruction(ins: Union[AInstruction, CInstruction], symtab: Mapping[str, int]) -> str:
    if isinstance(ins, AInstruction):
        return encode_address(resolve(ins.target, symtab))
    if isinstance(ins, CInstruction):
        return encode_compute(ins.dest, ins.comp, ins.jump)
    raise TypeError(f"No codificable: {ins!r}")

# ---------------- Decodificador ----------------

def decode(word: str) -> Union[AInstruction, CInstruction]:
    """Inversa de encode_instruction para mnemónicos canónicos."""
    if len(word) != WORD_BITS:
        raise HackError(error(f"Palabra de {len(word)} bits, se esperaban {WORD_BITS}",
                              kind="MalformedLine"))
    try:
        value = from_bin(word)
    except ValueError as ex:
        raise HackError(error(str(ex), kind="MalformedLine")) from None
    if word[0] == "0":
        return AInstruction(Literal(value))
    if not word.startswith(C_PREFIX):
        raise HackError(error(f"Prefijo de C-instruction inválido: {word[:3]}", kind="MalformedLine"))
    c, d, j = word[3:10], word[10:13], word[13:16]
    comp = COMP_NAMES.get(c)
    if comp is None:
        raise HackError(error(f"Código de cómputo desconocido: {c}", kind="UnknownMnemonic"))
    return CInstruction(comp=comp, dest=DEST_NAMES.get(d), jump=JUMP_NAMES.get(j))

# ---------------- Codificador principal ----------------

def encode(
    nodes: List[Node],
    symtab: Mapping[str, int],
    *,
    filename: Optional[str] = None,
) -> EncodeResult:
    diags: List[Diagnostic] = []
    words: List[Encoded] = []
    pc = 0

    for n in nodes:
        if isinstance(n, Label):
            # no ocupa palabra; ya fue registrada en la pasada 1
            continue
        try:
            word = encode_instruction(n, symtab)
        except HackError as ex:
            diags.append(ex.diagnostic.located(line=n.line, col=n.col, file=filename))
        else:
            words.append(Encoded(word=word, pc=pc, line=n.line, col=n.col))
        pc += 1

    return EncodeResult(words=words, diagnostics=diags)
