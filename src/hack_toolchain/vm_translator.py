from __future__ import annotations
import argparse, os, sys
from typing import Dict, List, Optional, Tuple

from .vm_parser import parse
from .vm_codegen import TranslatorState, translate
from .lexer import is_symbol
from .diagnostics import Diagnostic, HackError, error, has_errors
from .writers import output_path, write_lines

def static_prefix(path: str) -> str:
    """Prefijo de los símbolos static: nombre del archivo sin directorio ni extensión."""
    stem = os.path.splitext(os.path.basename(path))[0]
    if not is_symbol(stem):
        raise HackError(error(f"El nombre '{stem}' no sirve como prefijo de símbolos",
                              file=path, kind="NamespaceCollision",
                              hint="debe empezar por letra o _ . $ : y no contener espacios"))
    return stem

def translate_text(text: str, *, filename: str | None = None,
                   file_stem: str | None = None) -> Tuple[list, List[Diagnostic], List[str]]:
    """Parsea y traduce un archivo VM completo con estado nuevo.
    Devuelve (commands, diagnostics_totales, asm_lines)."""
    if file_stem is None:
        try:
            file_stem = static_prefix(filename) if filename else "Main"
        except HackError as ex:
            return [], [ex.diagnostic], []
    commands, diags_parse = parse(text, filename=filename)
    _, lines, diags_tr = translate(commands, TranslatorState(file_stem), filename=filename)
    return commands, list(diags_parse) + list(diags_tr), lines

def translate_file(source: str, *, out_dir: str | None = None,
                   seen: Optional[Dict[str, str]] = None) -> int:
    """Traduce un .vm a .asm. 'seen' acumula prefijos static ya usados en esta ejecución."""
    try:
        stem = static_prefix(source)
        if seen is not None:
            if stem in seen:
                raise HackError(error(f"Prefijo static '{stem}' ya usado por {seen[stem]}",
                                      file=source, kind="NamespaceCollision"))
            seen[stem] = source
    except HackError as ex:
        print(ex.diagnostic, file=sys.stderr)
        return 1

    try:
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {source}: {ex}", file=sys.stderr)
        return 2

    commands, diags, lines = translate_text(text, filename=source, file_stem=stem)

    for d in diags:
        print(d, file=sys.stderr)
    if has_errors(diags):
        return 1

    out = output_path(source, ".asm", out_dir)
    try:
        write_lines(lines, out)
    except OSError as ex:
        print(f"ERROR al escribir {out}: {ex}", file=sys.stderr)
        return 3

    print(f"OK: {len(commands)} comandos → {out}")
    return 0

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Hack VM translator (stack VM → Hack assembly)")
    ap.add_argument("sources", nargs="+", help="archivos .vm de entrada")
    ap.add_argument("-o", "--out-dir", default=None,
                    help="directorio de salida (por defecto, junto a cada fuente)")
    args = ap.parse_args(argv)

    seen: Dict[str, str] = {}
    status = 0
    for source in args.sources:
        rc = translate_file(source, out_dir=args.out_dir, seen=seen)
        status = max(status, rc)
    return status

if __name__ == "__main__":
    raise SystemExit(main())
