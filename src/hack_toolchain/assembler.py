from __future__ import annotations
import argparse, sys
from typing import Tuple

from .parser import parse
from .linker import link
from .encoding import encode
from .diagnostics import has_errors
from .writers import output_path, write_bin

def assemble_text(text: str, *, filename: str | None = None) -> Tuple[list, list, object, object]:
    """Parsea, hace PASADA 1 (etiquetas), PASADA 2 (variables) y codifica.
    Devuelve (nodes, diagnostics_totales, link_result, enc_result)."""
    nodes, diags_parse = parse(text, filename=filename)
    lnk = link(nodes, filename=filename)
    enc = encode(nodes, lnk.symtab, filename=filename)
    diags = list(diags_parse) + list(lnk.diagnostics) + list(enc.diagnostics)
    return nodes, diags, lnk, enc

def assemble_file(source: str, *, out_dir: str | None = None) -> int:
    """Ensambla un .asm a .hack. Devuelve 0 si todo fue bien."""
    try:
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {source}: {ex}", file=sys.stderr)
        return 2

    nodes, diags, lnk, enc = assemble_text(text, filename=source)

    # imprimimos todo; si hay error, no se escribe salida para este archivo
    for d in diags:
        print(d, file=sys.stderr)
    if has_errors(diags):
        return 1

    out = output_path(source, ".hack", out_dir)
    try:
        write_bin(enc.words, out)
    except OSError as ex:
        print(f"ERROR al escribir {out}: {ex}", file=sys.stderr)
        return 3

    print(f"OK: {len(enc.words)} instrucciones → {out}")
    return 0

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Hack two-pass assembler")
    ap.add_argument("sources", nargs="+", help="archivos .asm de entrada")
    ap.add_argument("-o", "--out-dir", default=None,
                    help="directorio de salida (por defecto, junto a cada fuente)")
    args = ap.parse_args(argv)

    status = 0
    for source in args.sources:
        rc = assemble_file(source, out_dir=args.out_dir)
        status = max(status, rc)
    return status

if __name__ == "__main__":
    raise SystemExit(main())
