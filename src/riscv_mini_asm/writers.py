from __future__ import annotations
from typing import Iterable, List, Tuple

from .isa import Kind, decode_kind
from .utils import to_hex32, to_bin32
from .encoding import Encoded, branch_offset
from .diagnostics import Diagnostic, ErrorKind, warning

def pad_words(words: List[Encoded], size: int) -> Tuple[List[Encoded], List[Diagnostic]]:
    """Completa con palabras cero hasta 'size'. Nunca trunca: si 'size' es
    menor que el número de instrucciones se avisa y se devuelve tal cual."""
    if size < len(words):
        d = warning(f"la longitud de relleno ({size}) es menor que el número de instrucciones ({len(words)})",
                    kind=ErrorKind.PADDING_TOO_SHORT, hint="no se trunca la salida")
        return list(words), [d]
    out = list(words)
    for i in range(len(words), size):
        out.append(Encoded(word=0, index=i, line=0, kind=Kind.NOP))
    return out, []

def to_bin_lines(words: Iterable[Encoded]) -> List[str]:
    return [to_bin32(w.word) for w in words]

def to_hex_lines(words: Iterable[Encoded]) -> List[str]:
    return [to_hex32(w.word) for w in words]

def to_listing_lines(words: Iterable[Encoded]) -> List[str]:
    out = []
    for w in words:
        kind = decode_kind(w.word)
        mnem = kind.value if kind else "?"
        row = f"{w.index:4d}  {to_hex32(w.pc)}  {to_bin32(w.word)}  {mnem:<4} {w.text}".rstrip()
        if kind is not None and kind.is_branch:
            row += f"  ; {branch_offset(w.word):+d}"
        out.append(row)
    return out

def _write_lines(lines: List[str], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

def write_bin(words: Iterable[Encoded], path: str) -> None:
    _write_lines(to_bin_lines(words), path)

def write_hex(words: Iterable[Encoded], path: str) -> None:
    _write_lines(to_hex_lines(words), path)
