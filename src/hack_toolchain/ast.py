'''
dataclases del modelo (instrucciones Hack y comandos VM)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Union, Optional

# ---- Operandos de una A-instruction ----

@dataclass(frozen=True)
class Sym:
    """Símbolo (etiqueta, variable o predefinido) referenciado por '@nombre'."""
    name: str

@dataclass(frozen=True)
class Literal:
    """Constante decimal no negativa de '@123'."""
    value: int

Target = Union[Sym, Literal]

# ---- Nodos del ensamblador ----

@dataclass(frozen=True)
class AInstruction:
    """'@valor': carga 15 bits en el registro A."""
    target: Target
    line: Optional[int] = None
    col: Optional[int] = None

@dataclass(frozen=True)
class CInstruction:
    """'dest=comp;jump': operación de la ALU con destino y salto opcionales."""
    comp: str
    dest: Optional[str] = None
    jump: Optional[str] = None
    line: Optional[int] = None
    col: Optional[int] = None

@dataclass(frozen=True)
class Label:
    """'(NOMBRE)': liga el nombre a la dirección de la siguiente instrucción real."""
    name: str
    line: Optional[int] = None
    col: Optional[int] = None

Node = Union[AInstruction, CInstruction, Label]

# ---- Comandos de la máquina virtual ----

@dataclass(frozen=True)
class Arithmetic:
    op: str
    line: Optional[int] = None

    def __str__(self) -> str:
        return self.op

@dataclass(frozen=True)
class Push:
    segment: str
    index: int
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"push {self.segment} {self.index}"

@dataclass(frozen=True)
class Pop:
    segment: str
    index: int
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"pop {self.segment} {self.index}"

VmCommand = Union[Arithmetic, Push, Pop]
