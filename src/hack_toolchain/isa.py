'''
tablas formales Hack (comp/dest/jump, símbolos predefinidos, segmentos VM)
'''

from __future__ import annotations
from itertools import permutations
from types import MappingProxyType
from typing import Dict, Mapping

# Prefijo fijo de toda C-instruction
C_PREFIX = "111"

# Campo 'a' + c1..c6 (7 bits). a=1 selecciona M en lugar de A.
_COMP: Dict[str, str] = {
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "M":   "1110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "!M":  "1110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "-M":  "1110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "M+1": "1110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "M-1": "1110010",
    "D+A": "0000010",
    "D+M": "1000010",
    "D-A": "0010011",
    "D-M": "1010011",
    "A-D": "0000111",
    "M-D": "1000111",
    "D&A": "0000000",
    "D&M": "1000000",
    "D|A": "0010101",
    "D|M": "1010101",
}

# Formas conmutadas aceptadas al codificar (nunca producidas al decodificar)
_COMP_ALIASES: Dict[str, str] = {
    "A+D": "D+A", "M+D": "D+M",
    "A&D": "D&A", "M&D": "D&M",
    "A|D": "D|A", "M|D": "D|M",
}

# Destinos canónicos; d1=A, d2=D, d3=M
_DEST: Dict[str, str] = {
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
}

_JUMP: Dict[str, str] = {
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
}

def _all_dest_orders() -> Dict[str, str]:
    out: Dict[str, str] = {}
    for name, code in _DEST.items():
        for perm in permutations(name):
            out["".join(perm)] = code
    return out

COMP_CODES: Mapping[str, str] = MappingProxyType(
    {**_COMP, **{alias: _COMP[canon] for alias, canon in _COMP_ALIASES.items()}})
DEST_CODES: Mapping[str, str] = MappingProxyType(_all_dest_orders())
JUMP_CODES: Mapping[str, str] = MappingProxyType(dict(_JUMP))

# Inversas para decodificar (solo nombres canónicos)
COMP_NAMES: Mapping[str, str] = MappingProxyType({v: k for k, v in _COMP.items()})
DEST_NAMES: Mapping[str, str] = MappingProxyType({v: k for k, v in _DEST.items()})
JUMP_NAMES: Mapping[str, str] = MappingProxyType({v: k for k, v in _JUMP.items()})

# ---- Símbolos predefinidos ----

SCREEN = 16384
KBD = 24576

def _predefined() -> Dict[str, int]:
    syms = {f"R{i}": i for i in range(16)}
    syms.update({"SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
                 "SCREEN": SCREEN, "KBD": KBD})
    return syms

PREDEFINED_SYMBOLS: Mapping[str, int] = MappingProxyType(_predefined())

# Primera dirección libre para variables
VARIABLE_BASE = 16

# ---- Convenciones de la máquina virtual ----

ARITHMETIC_OPS = frozenset({"add", "sub", "neg", "eq", "gt", "lt", "and", "or", "not"})

# Segmentos relativos a un puntero base
BASE_POINTERS: Mapping[str, str] = MappingProxyType({
    "local": "LCL", "argument": "ARG", "this": "THIS", "that": "THAT",
})
SEGMENTS = frozenset({*BASE_POINTERS, "constant", "static", "temp", "pointer"})

TEMP_BASE = 5
TEMP_SIZE = 8
POINTER_REGS = ("THIS", "THAT")

# Registro auxiliar para direcciones de pop
SCRATCH_REG = "R13"

def comp_code(mnemonic: str) -> str:
    """Devuelve los 7 bits (a + c1..c6) del mnemónico de cómputo."""
    if mnemonic not in COMP_CODES:
        raise KeyError(f"Cómputo desconocido: {mnemonic}")
    return COMP_CODES[mnemonic]

def dest_code(mnemonic: str | None) -> str:
    """Devuelve los 3 bits de destino; '000' si no hay destino."""
    if mnemonic is None:
        return "000"
    if mnemonic not in DEST_CODES:
        raise KeyError(f"Destino desconocido: {mnemonic}")
    return DEST_CODES[mnemonic]

def jump_code(mnemonic: str | None) -> str:
    """Devuelve los 3 bits de salto; '000' si no hay salto."""
    if mnemonic is None:
        return "000"
    if mnemonic not in JUMP_CODES:
        raise KeyError(f"Salto desconocido: {mnemonic}")
    return JUMP_CODES[mnemonic]
