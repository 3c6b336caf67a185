from __future__ import annotations
import argparse, os, sys
from typing import List, Optional, Tuple

from .ast import Node
from .parser import parse
from .linker import first_pass, resolve, LinkResult
from .encoding import Encoded
from .diagnostics import Diagnostic, has_errors
from .writers import pad_words, write_bin, write_hex, to_listing_lines

def assemble_text(
    text: str,
    *,
    filename: str | None = None,
    padding: Optional[int] = None,
    check_ranges: bool = True,
) -> Tuple[List[Node], List[Diagnostic], LinkResult, List[Encoded]]:
    """Reconoce las líneas, hace PASADA 1 (etiquetas) y PASADA 2 (ramas).
    Devuelve (nodes, diagnostics_totales, link_result, words).

    Todo o nada: si hay algún error, 'words' queda vacía."""
    nodes, diags_parse = parse(text, filename=filename, check_ranges=check_ranges)
    link = first_pass(nodes, filename=filename)
    res = resolve(nodes, link.symtab, filename=filename, check_ranges=check_ranges)
    diags = list(diags_parse) + list(link.diagnostics) + list(res.diagnostics)
    if has_errors(diags):
        return nodes, diags, link, []

    words = res.words
    if padding is not None:
        words, diags_pad = pad_words(words, padding)
        diags += diags_pad
    return nodes, diags, link, words

def default_obj_path(asm_path: str) -> str:
    """'prog.asm' -> 'prog.obj' (mismo directorio)."""
    return os.path.splitext(asm_path)[0] + ".obj"

def _word_count(value: str) -> int:
    """Tipo argparse para --padding: entero no negativo."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"no es un entero: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"debe ser >= 0: {n}")
    return n

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="riscv-mini-asm",
                                 description="Ensamblador de dos pasadas para un subconjunto RISC-V")
    ap.add_argument("asm", help="archivo de entrada en ensamblador")
    ap.add_argument("-o", "--obj", help="archivo de salida (palabras binarias ASCII); por defecto <asm>.obj")
    ap.add_argument("--padding", type=_word_count, metavar="N",
                    help="completa la salida con palabras cero hasta N palabras")
    ap.add_argument("--hex", metavar="PATH", help="escribe además las palabras en hexadecimal")
    ap.add_argument("-l", "--listing", action="store_true", help="imprime un listado por stdout")
    ap.add_argument("--no-range-checks", action="store_true",
                    help="no valida el ancho de registros, inmediatos ni offsets")
    args = ap.parse_args(argv)

    try:
        with open(args.asm, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {args.asm}: {ex}", file=sys.stderr)
        return 2

    nodes, diags, link, words = assemble_text(text, filename=args.asm, padding=args.padding,
                                              check_ranges=not args.no_range_checks)

    for d in diags:
        # imprimimos todo; si hay error, devolvemos código 1
        print(d, file=sys.stderr)
    if has_errors(diags):
        return 1

    obj_path = args.obj or default_obj_path(args.asm)
    wrote_obj = False
    try:
        write_bin(words, obj_path)
        wrote_obj = True
        if args.hex:
            write_hex(words, args.hex)
    except OSError as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        # sin salidas parciales
        if wrote_obj:
            os.remove(obj_path)
        return 3

    if args.listing:
        for line in to_listing_lines(words):
            print(line)

    print(f"OK: {link.count} instrucciones, {len(words)} palabras → {obj_path}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
