'''
 utilidades de bits (direcciones de 15 bits, binario ASCII)
'''

from __future__ import annotations

# Palabra de 16 bits; las direcciones de una A-instruction ocupan 15
WORD_BITS = 16
ADDR_BITS = 15
MAX_ADDRESS = (1 << ADDR_BITS) - 1   # 32767

def is_unsigned_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [0, 2^n) (sin signo de n bits)."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return 0 <= x < (1 << n)

def to_bin(x: int, width: int) -> str:
    """Representación binaria sin signo de 'width' bits; x debe caber."""
    if not is_unsigned_nbit(x, width):
        raise ValueError(f"{x} no cabe en {width} bits sin signo")
    return format(x, f"0{width}b")

def from_bin(bits: str) -> int:
    """Convierte una cadena de '0'/'1' a entero sin signo."""
    if not bits or any(ch not in "01" for ch in bits):
        raise ValueError(f"cadena binaria inválida: {bits!r}")
    return int(bits, 2)
