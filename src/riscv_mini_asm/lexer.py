from __future__ import annotations
import re
from typing import List, Optional, Tuple

def strip_comment(line: str) -> str:
    """Remove a '//' comment and surrounding whitespace"""
    return line.split("//", 1)[0].strip()

LABEL_RE = re.compile(r"^(\w+)\s*:\s*$", re.ASCII)

def split_label(line: str) -> Optional[str]:
    """Return the label name if the (comment-free) line is exactly 'name:'."""
    m = LABEL_RE.match(line.strip())
    return m.group(1) if m else None

def split_mnemonic_operands(line: str) -> Tuple[str, str]:
    s = line.strip()
    if not s:
        return "", ""
    parts = s.split(None, 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()

# Token shapes
REG_RE = re.compile(r"^x(\d+)$", re.ASCII)
IMM_RE = re.compile(r"^\d+$", re.ASCII)
SYMBOL_RE = re.compile(r"^\w+$", re.ASCII)

TOKEN_RE = re.compile(r"[(),]|[^\s(),]+")

def tokenize(op_str: str) -> List[str]:
    """Split an operand string into words, commas and parentheses.

    'x5, 40(x6)' -> ['x5', ',', '40', '(', 'x6', ')']
    """
    return TOKEN_RE.findall(op_str)

def is_reg(token: str) -> bool:
    return REG_RE.match(token) is not None

def is_imm(token: str) -> bool:
    return IMM_RE.match(token) is not None

def is_symbol(token: str) -> bool:
    return SYMBOL_RE.match(token) is not None

def match_form(tokens: List[str], form: Tuple[str, ...]) -> Optional[List[str]]:
    """Match tokens against a form descriptor (see isa.FORMS).

    Returns the operand tokens (registers, immediates, labels) in order, or
    None when the shape does not match. A ',' slot accepts an optional comma,
    so operands may be separated by commas or just whitespace.
    """
    out: List[str] = []
    i = 0
    for slot in form:
        tok = tokens[i] if i < len(tokens) else None
        if slot == ",":
            if tok == ",":
                i += 1
            continue
        if tok is None:
            return None
        if slot in ("(", ")"):
            if tok != slot:
                return None
        elif slot == "reg":
            if not is_reg(tok):
                return None
            out.append(tok)
        elif slot == "imm":
            if not is_imm(tok):
                return None
            out.append(tok)
        elif slot == "label":
            if not is_symbol(tok):
                return None
            out.append(tok)
        else:
            raise ValueError(f"unknown form slot: {slot!r}")
        i += 1
    if i != len(tokens):
        return None
    return out
