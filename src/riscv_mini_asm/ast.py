'''
nodos producidos por el reconocedor de líneas (Instruction, LabelDef)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from .isa import Kind

@dataclass(frozen=True)
class Instruction:
    """Instrucción reconocida con su palabra parcialmente codificada.

    En las ramas, 'ref' es la etiqueta destino y los bits del inmediato
    siguen a cero hasta la segunda pasada.
    """
    kind: Kind
    word: int                  # u32 parcial
    index: int                 # posición 0.. en el flujo de instrucciones
    line: int
    text: str
    ref: Optional[str] = None

@dataclass(frozen=True)
class LabelDef:
    """Definición 'name:'; index es el número de instrucciones vistas hasta ahí."""
    name: str
    index: int
    line: int
    text: str

Node = Union[Instruction, LabelDef]
