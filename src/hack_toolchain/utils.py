'''
bit-twiddling (u16, rangos de 15 bits, formato binario, split fields)
'''

from __future__ import annotations
from typing import Tuple

# Máscaras para palabras de 16 bits y direcciones de 15 bits
U16_MASK = 0xFFFF
ADDR_MASK = 0x7FFF

# Toda dirección (RAM o ROM) debe ser estrictamente menor que este límite
ADDRESS_LIMIT = 1 << 15

def u16(x: int) -> int:
    """Fuerza el valor al rango de 16 bits sin signo."""
    return x & U16_MASK

def sign_extend(x: int, bits: int) -> int:
    """Extiende el signo de x, asumiendo que cabe en 'bits' bits (complemento a dos)."""
    if bits <= 0:
        raise ValueError("bits debe ser positivo")
    mask = (1 << bits) - 1
    x &= mask
    sign_bit = 1 << (bits - 1)
    return (x ^ sign_bit) - sign_bit

def is_unsigned_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [0, 2^n) (sin signo de n bits)."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return 0 <= x < (1 << n)

def is_address(x: int) -> bool:
    """Dirección válida de 15 bits: 0 <= x < 2^15."""
    return is_unsigned_nbit(x, 15)

def to_bin16(x: int) -> str:
    """Representación binaria de 16 bits (cadena de '0'/'1', MSB primero)."""
    return format(u16(x), "016b")

def from_bin16(s: str) -> int:
    """Inversa de to_bin16; exige exactamente 16 caracteres '0'/'1'."""
    if len(s) != 16 or any(c not in "01" for c in s):
        raise ValueError(f"palabra binaria inválida: {s!r}")
    return int(s, 2)

def split_bits(value: int, positions: Tuple[Tuple[int, int], ...]) -> tuple[int, ...]:
    """Extrae campos de bits dados como rangos (hi, lo) inclusivos (base 0)."""
    out = []
    for hi, lo in positions:
        if hi < lo or hi < 0 or lo < 0:
            raise ValueError("rango de bits inválido")
        width = hi - lo + 1
        field = (value >> lo) & ((1 << width) - 1)
        out.append(field)
    return tuple(out)
