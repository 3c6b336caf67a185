# src/riscv_mini_asm/parser.py
from __future__ import annotations
from typing import List, Optional, Tuple

from .lexer import (
    strip_comment,
    split_label,
    split_mnemonic_operands,
    tokenize,
    match_form,
)
from .ast import Instruction, LabelDef, Node
from .isa import FORMS, SPEC, ISpec
from .encoding import encode_operands
from .regs import reg_num, is_valid_reg
from .utils import fits_unsigned
from .diagnostics import Diagnostic, ErrorKind, error

def _operand_values(s: ISpec, toks: List[str]) -> List[int]:
    """Convierte los tokens de operando en enteros según la forma."""
    if s.form == "rrr":
        return [reg_num(t) for t in toks]
    if s.form == "mem":
        return [reg_num(toks[0]), int(toks[1]), reg_num(toks[2])]
    if s.form == "rrl":
        return [reg_num(toks[0]), reg_num(toks[1])]
    return []

def _range_problem(s: ISpec, vals: List[int]) -> Optional[str]:
    if s.form == "mem":
        regs, imm = [vals[0], vals[2]], vals[1]
    else:
        regs, imm = vals, None
    for num in regs:
        if not is_valid_reg(num):
            return f"Registro fuera de rango: x{num} (x0..x31)"
    if imm is not None and not fits_unsigned(imm, 12):
        return f"Inmediato de 12 bits fuera de rango: {imm} (0..4095)"
    return None

def recognize(core: str) -> Optional[Tuple[ISpec, List[str]]]:
    """Clasifica una línea sin comentario como instrucción del subconjunto.

    Devuelve (descriptor, tokens de operando) o None si ninguna forma encaja.
    """
    mnemonic, op_str = split_mnemonic_operands(core)
    s = SPEC.get(mnemonic)
    if s is None:
        return None
    toks = match_form(tokenize(op_str), FORMS[s.form])
    if toks is None:
        return None
    return s, toks

def parse(text: str, *, filename: Optional[str] = None,
          check_ranges: bool = True) -> Tuple[List[Node], List[Diagnostic]]:
    """
    Devuelve (nodes, diagnostics) donde nodes es una lista de:
      - LabelDef(name, index, line, text)
      - Instruction(kind, word, index, line, text, ref)

    Reglas:
      - Comentarios: '//' hasta fin de línea; líneas vacías se ignoran.
      - Etiquetas: 'name:' sola en la línea; no consume índice.
      - Instrucciones: nop, ld, sd, and, or, add, sub, beq, blt.
      - Cualquier otra cosa es un error UNRECOGNIZED_LINE con la línea literal.

    Con check_ranges=False los operandos se empaquetan sin validar su ancho.
    """
    nodes: List[Node] = []
    diags: List[Diagnostic] = []
    index = 0

    for lineno, raw in enumerate(text.split("\n"), start=1):
        raw = raw.rstrip("\r")
        core = strip_comment(raw)
        if not core:
            continue
        src = raw.strip()

        label = split_label(core)
        if label is not None:
            nodes.append(LabelDef(name=label, index=index, line=lineno, text=src))
            continue

        hit = recognize(core)
        if hit is None:
            diags.append(error(f"Instrucción no válida: `{src}`", kind=ErrorKind.UNRECOGNIZED_LINE,
                               line=lineno, file=filename, text=raw))
            continue
        s, toks = hit
        vals = _operand_values(s, toks)

        if check_ranges:
            problem = _range_problem(s, vals)
            if problem:
                # se conserva el nodo para no desplazar los índices siguientes
                diags.append(error(problem, kind=ErrorKind.OPERAND_OUT_OF_RANGE,
                                   line=lineno, file=filename, text=raw))

        ref = toks[-1] if s.kind.is_branch else None
        word = encode_operands(s, vals)
        nodes.append(Instruction(kind=s.kind, word=word, index=index, line=lineno, text=src, ref=ref))
        index += 1

    return nodes, diags
