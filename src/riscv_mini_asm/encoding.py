# src/riscv_mini_asm/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .isa import ISpec, Kind
from .utils import u32, bits, sign_extend

# ---------------- Resultado de codificación ----------------

@dataclass(frozen=True)
class Encoded:
    word: int     # u32 final
    index: int    # posición en el flujo; la dirección es index * 4
    line: int
    kind: Kind
    text: str = ""

    @property
    def pc(self) -> int:
        return self.index * 4

# ---------------- Empaquetado de bits ----------------
# Los operandos se combinan con OR sin recortar a su campo: un registro de más
# de 5 bits invade el campo vecino. El parser valida rangos antes de llamar
# aquí salvo que se desactive la comprobación.

def pack_R(s: ISpec, rd: int, rs1: int, rs2: int) -> int:
    return u32(((s.funct7 or 0) << 25) |
               (rs2 << 20) |
               (rs1 << 15) |
               ((s.funct3 or 0) << 12) |
               (rd << 7) |
               s.opcode)

def pack_I(s: ISpec, rd: int, rs1: int, imm12: int) -> int:
    return u32((imm12 << 20) |
               (rs1 << 15) |
               ((s.funct3 or 0) << 12) |
               (rd << 7) |
               s.opcode)

def pack_S(s: ISpec, rs2: int, rs1: int, imm12: int) -> int:
    return u32(((imm12 & 0xFE0) << 20) |
               (rs2 << 20) |
               (rs1 << 15) |
               ((s.funct3 or 0) << 12) |
               ((imm12 & 0x1F) << 7) |
               s.opcode)

def pack_B(s: ISpec, rs1: int, rs2: int) -> int:
    """Palabra de rama sin inmediato; lo rellena splice_branch_offset."""
    return u32((rs2 << 20) |
               (rs1 << 15) |
               ((s.funct3 or 0) << 12) |
               s.opcode)

def encode_operands(s: ISpec, ops: List[int]) -> int:
    """Codifica una instrucción a partir de sus operandos numéricos.

    El orden de 'ops' es el textual de la forma: rrr -> rd, rs1, rs2;
    mem -> rd|rs2, imm, rs1; rrl -> rs1, rs2 (la etiqueta va aparte).
    """
    if s.itype == "NOP":
        return 0
    if s.itype == "R":
        rd, rs1, rs2 = ops
        return pack_R(s, rd, rs1, rs2)
    if s.itype == "I":
        rd, imm, rs1 = ops
        return pack_I(s, rd, rs1, imm)
    if s.itype == "S":
        rs2, imm, rs1 = ops
        return pack_S(s, rs2, rs1, imm)
    if s.itype == "B":
        rs1, rs2 = ops
        return pack_B(s, rs1, rs2)
    raise ValueError(f"Tipo de instrucción no soportado: {s.itype}")

# ---------------- Inmediato de rama (tipo B) ----------------

def splice_branch_offset(word: int, offset_bytes: int) -> int:
    """Inserta el desplazamiento de rama en la disposición dispersa del tipo B.

    imm[4:1] -> [11:8], imm[10:5] -> [30:25], imm[11] -> [7], imm[12] -> [31].
    Los desplazamientos negativos se tratan en complemento a dos (u32).
    """
    imm = u32(offset_bytes)
    word |= (imm & 0b0000_0000_0001_1110) << 7
    word |= (imm & 0b0111_1110_0000) << 20
    word |= (imm & 0b1000_0000_0000) >> 4
    word |= (imm & 0b1_0000_0000_0000) << 19
    return u32(word)

def branch_offset(word: int) -> int:
    """Reconstruye el desplazamiento con signo (13 bits) de una palabra tipo B."""
    imm = (bits(word, 31, 31) << 12 |
           bits(word, 7, 7) << 11 |
           bits(word, 30, 25) << 5 |
           bits(word, 11, 8) << 1)
    return sign_extend(imm, 13)
