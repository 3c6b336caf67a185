'''
operaciones de bits que usa el ensamblador: recorte a palabra de 32 bits,
lectura del inmediato de rama (13 bits con signo), límites de campos y
render de las palabras en binario/hex para el .obj y el listado
'''

from __future__ import annotations

# Máscara para 32 bits sin signo
U32_MASK = 0xFFFFFFFF

def u32(x: int) -> int:
    """Recorta x a palabra de 32 bits; un offset de rama negativo queda en complemento a dos."""
    return x & U32_MASK

def sign_extend(x: int, bits: int) -> int:
    """Interpreta los 'bits' bits bajos de x como entero con signo (p.ej. el inmediato de 13 bits de beq/blt)."""
    if bits <= 0:
        raise ValueError("bits debe ser positivo")
    x &= (1 << bits) - 1
    sign_bit = 1 << (bits - 1)
    return (x ^ sign_bit) - sign_bit

def fits_unsigned(x: int, n: int) -> bool:
    """True si x cabe en un campo sin signo de n bits."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return 0 <= x < (1 << n)

def fits_signed(x: int, n: int) -> bool:
    """True si x cabe en n bits con signo (complemento a dos)."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return -(1 << (n - 1)) <= x <= (1 << (n - 1)) - 1

def bits(value: int, hi: int, lo: int) -> int:
    """Extrae el campo value[hi:lo] (inclusivo, base 0)."""
    if hi < lo or lo < 0:
        raise ValueError(f"rango de bits inválido: [{hi}:{lo}]")
    return (value >> lo) & ((1 << (hi - lo + 1)) - 1)

def to_bin32(x: int) -> str:
    """Línea del archivo .obj: 32 caracteres '0'/'1'."""
    return format(u32(x), "032b")

def to_hex32(x: int, *, prefix: bool = True) -> str:
    """Palabra en hex de 8 dígitos, para --hex y el listado."""
    s = format(u32(x), "08x")
    return ("0x" + s) if prefix else s
