from __future__ import annotations
import re
from typing import List, Optional, Tuple

COMMENT = "//"

def strip_comment(line: str) -> str:
    """Remove '//' comments and surrounding whitespace"""
    idx = line.find(COMMENT)
    if idx >= 0:
        line = line[:idx]
    return line.strip()

SYMBOL_RE  = re.compile(r"^[A-Za-z_.$:][A-Za-z0-9_.$:]*$")
LITERAL_RE = re.compile(r"^[0-9]+$")
SYMBOL_CHAR_RE = re.compile(r"[A-Za-z0-9_.$:]")

def is_symbol(token: str) -> bool:
    return bool(SYMBOL_RE.match(token))

def is_literal(token: str) -> bool:
    return bool(LITERAL_RE.match(token))

def check_symbol(token: str) -> str:
    """Return token if it is a valid symbol, else raise ValueError explaining why."""
    if not token:
        raise ValueError("símbolo vacío")
    if is_symbol(token):
        return token
    if token[0].isdigit():
        raise ValueError(f"un símbolo no puede empezar por dígito: '{token}'")
    bad = next((ch for ch in token if not SYMBOL_CHAR_RE.match(ch)), token[0])
    raise ValueError(f"carácter inválido '{bad}' en símbolo '{token}'")

# first character decides the kind of assembly line
def line_kind(core: str) -> str:
    if core.startswith("@"):
        return "A"
    if core.startswith("("):
        return "L"
    return "C"

COMPUTE_CHARS = frozenset("01-+ADM!&|JGTEQLNP=;")

def filter_compute(text: str) -> str:
    """Keep only the meaningful characters of a compute instruction (drops whitespace)."""
    out = []
    for ch in text:
        if ch.isspace():
            continue
        if ch not in COMPUTE_CHARS:
            raise ValueError(f"carácter inválido '{ch}' en instrucción de cómputo")
        out.append(ch)
    return "".join(out)

def split_compute(text: str) -> Tuple[Optional[str], str, Optional[str]]:
    """Split 'dest=comp;jump' into (dest, comp, jump); dest and jump may be None."""
    if text.count("=") > 1 or text.count(";") > 1:
        raise ValueError(f"instrucción de cómputo mal formada: '{text}'")
    dest: Optional[str] = None
    jump: Optional[str] = None
    rest = text
    if ";" in rest:
        rest, jump = rest.split(";", 1)
        if not jump:
            raise ValueError(f"falta el salto tras ';': '{text}'")
    if "=" in rest:
        dest, rest = rest.split("=", 1)
        if not dest:
            raise ValueError(f"falta el destino antes de '=': '{text}'")
    if "=" in (jump or ""):
        raise ValueError(f"'=' después de ';': '{text}'")
    if not rest:
        raise ValueError(f"falta el cómputo: '{text}'")
    return dest, rest, jump

def split_fields(line: str) -> List[str]:
    """Split a VM command into whitespace separated fields"""
    return line.split()
