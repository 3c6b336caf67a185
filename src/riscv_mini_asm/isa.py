'''
tabla de patrones de instrucción (opcodes, funct3/7, formas de operandos)
'''

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

class Kind(Enum):
    """Clase de instrucción reconocida por el ensamblador."""
    NOP = "nop"
    LOAD = "ld"
    STORE = "sd"
    AND = "and"
    OR = "or"
    ADD = "add"
    SUB = "sub"
    BRANCH_EQ = "beq"
    BRANCH_LT = "blt"

    @property
    def is_branch(self) -> bool:
        return self in (Kind.BRANCH_EQ, Kind.BRANCH_LT)

# Formas de operandos: secuencias de ranuras que el parser casa contra los tokens.
#   'reg'   -> x<dígitos>
#   'imm'   -> dígitos decimales
#   'label' -> nombre de etiqueta
#   ','     -> coma opcional (separador)
#   '(' ')' -> paréntesis literales
FORMS: Dict[str, Tuple[str, ...]] = {
    "none": (),
    "rrr":  ("reg", ",", "reg", ",", "reg"),
    "mem":  ("reg", ",", "imm", "(", "reg", ")"),
    "rrl":  ("reg", ",", "reg", ",", "label"),
}

@dataclass(frozen=True)
class ISpec:
    """Descriptor de una instrucción del subconjunto.

    - kind: clase de instrucción
    - itype: 'R','I','S','B' o 'NOP'
    - opcode: campo de 7 bits
    - funct3/funct7: cuando aplica
    - form: clave en FORMS con la forma aceptada de operandos
    """
    kind: Kind
    itype: str
    opcode: int
    funct3: Optional[int] = None
    funct7: Optional[int] = None
    form: str = "none"

# Constantes de opcode
OP_R      = 0b0110011  # 0x33
OP_LOAD   = 0b0000011  # 0x03
OP_STORE  = 0b0100011  # 0x23
OP_BRANCH = 0b1100011  # 0x63

SPEC: Dict[str, ISpec] = {}

def _add(s: ISpec) -> None:
    SPEC[s.kind.value] = s

_add(ISpec(Kind.NOP,       "NOP", 0))
_add(ISpec(Kind.LOAD,      "I", OP_LOAD,   funct3=0b011, form="mem"))
_add(ISpec(Kind.STORE,     "S", OP_STORE,  funct3=0b011, form="mem"))
_add(ISpec(Kind.AND,       "R", OP_R,      funct3=0b111, funct7=0b0000000, form="rrr"))
_add(ISpec(Kind.OR,        "R", OP_R,      funct3=0b110, funct7=0b0000000, form="rrr"))
_add(ISpec(Kind.ADD,       "R", OP_R,      funct3=0b000, funct7=0b0000000, form="rrr"))
_add(ISpec(Kind.SUB,       "R", OP_R,      funct3=0b000, funct7=0b0100000, form="rrr"))
_add(ISpec(Kind.BRANCH_EQ, "B", OP_BRANCH, funct3=0b000, form="rrl"))
_add(ISpec(Kind.BRANCH_LT, "B", OP_BRANCH, funct3=0b100, form="rrl"))

def spec(mnemonic: str) -> ISpec:
    """Devuelve el descriptor de una instrucción por mnemónico."""
    if mnemonic not in SPEC:
        raise KeyError(f"Instrucción desconocida: {mnemonic}")
    return SPEC[mnemonic]

def decode_kind(word: int) -> Optional[Kind]:
    """Recupera la clase de instrucción a partir de opcode/funct3/funct7.

    La palabra todo-ceros es NOP. Devuelve None si la combinación no
    pertenece al subconjunto.
    """
    if word == 0:
        return Kind.NOP
    opcode = word & 0x7F
    f3 = (word >> 12) & 0x7
    f7 = (word >> 25) & 0x7F
    for s in SPEC.values():
        if s.itype == "NOP" or s.opcode != opcode or s.funct3 != f3:
            continue
        # en tipo B y S los bits 25-31 son inmediato, no funct7
        if s.funct7 is not None and s.funct7 != f7:
            continue
        return s.kind
    return None
