# src/riscv_mini_asm/linker.py
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .ast import Instruction, LabelDef, Node
from .encoding import Encoded, splice_branch_offset
from .utils import fits_signed
from .diagnostics import Diagnostic, ErrorKind, error, warning, note, has_errors

# Ancho del inmediato de rama en bytes (con signo)
BRANCH_IMM_BITS = 13

# ---------- Resultados ----------

@dataclass(frozen=True)
class LinkResult:
    symtab: Mapping[str, int]   # etiqueta -> índice de instrucción (sólo lectura)
    count: int                  # número de instrucciones
    diagnostics: List[Diagnostic]

@dataclass(frozen=True)
class ResolveResult:
    words: List[Encoded]
    diagnostics: List[Diagnostic]

# ---------- Pasada 1 (tabla de etiquetas) ----------

def first_pass(nodes: List[Node], *, filename: Optional[str] = None) -> LinkResult:
    """Recorre los nodos una vez y asocia cada etiqueta a su índice.

    Una etiqueta redefinida se queda con la última definición; se avisa
    con una advertencia (más una nota con la definición previa) pero no
    se aborta.
    """
    symtab: Dict[str, int] = {}
    defs: Dict[str, LabelDef] = {}
    diags: List[Diagnostic] = []
    count = 0

    for n in nodes:
        if isinstance(n, LabelDef):
            if n.name in symtab:
                diags.append(warning(f"Etiqueta redefinida: {n.name}", kind=ErrorKind.DUPLICATE_LABEL,
                                     line=n.line, file=filename, text=n.text,
                                     hint="prevalece la última definición"))
                prev = defs[n.name]
                diags.append(note(f"Definición anterior de {n.name}", kind=ErrorKind.DUPLICATE_LABEL,
                                  line=prev.line, file=filename, text=prev.text))
            symtab[n.name] = n.index
            defs[n.name] = n
        elif isinstance(n, Instruction):
            count += 1

    return LinkResult(symtab=MappingProxyType(symtab), count=count, diagnostics=diags)

# ---------- Pasada 2 (resolución de ramas) ----------

def resolve(
    nodes: List[Node],
    symtab: Mapping[str, int],
    *,
    filename: Optional[str] = None,
    check_ranges: bool = True,
) -> ResolveResult:
    """Produce las palabras finales rellenando el inmediato de cada rama.

    offset = (destino - índice) * 4 bytes. Si alguna rama apunta a una
    etiqueta inexistente no se devuelve ninguna palabra.
    """
    diags: List[Diagnostic] = []
    words: List[Encoded] = []

    for n in nodes:
        if not isinstance(n, Instruction):
            continue
        word = n.word
        if n.ref is not None:
            target = symtab.get(n.ref)
            if target is None:
                diags.append(error(f"Etiqueta no definida: `{n.ref}`", kind=ErrorKind.UNDEFINED_LABEL,
                                   line=n.line, file=filename, text=n.text))
                continue
            offset = (target - n.index) * 4
            if check_ranges and not fits_signed(offset, BRANCH_IMM_BITS):
                diags.append(error(f"Offset de rama fuera de rango: {offset} bytes (−4096..4094)",
                                   kind=ErrorKind.OPERAND_OUT_OF_RANGE,
                                   line=n.line, file=filename, text=n.text))
                continue
            word = splice_branch_offset(word, offset)
        words.append(Encoded(word=word, index=n.index, line=n.line, kind=n.kind, text=n.text))

    if has_errors(diags):
        return ResolveResult(words=[], diagnostics=diags)
    return ResolveResult(words=words, diagnostics=diags)
