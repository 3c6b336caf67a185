'''
registros 'xN': conversión a índice y validación de rango
'''

from __future__ import annotations

from .lexer import REG_RE

NUM_REGS = 32

def reg_num(token: str) -> int:
    """Devuelve el índice N de 'xN' tal cual, sin comprobar rango; ValueError si no es registro."""
    m = REG_RE.match(token.strip())
    if not m:
        raise ValueError(f"Registro inválido: {token}")
    return int(m.group(1))

def is_valid_reg(num: int) -> bool:
    """Indica si el índice cabe en el campo de 5 bits (x0..x31)."""
    return 0 <= num < NUM_REGS
