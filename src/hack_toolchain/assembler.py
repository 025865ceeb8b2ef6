from __future__ import annotations
import argparse, os, sys
from typing import Iterable, List, Tuple

from .lexer import clean_lines, number_lines
from .parser import parse
from .linker import first_pass, LinkResult
from .encoding import encode, EncodeResult
from .symtab import SymbolTable
from .writers import to_bin_lines, write_bin
from .diagnostics import ToolchainError, ResourceError

def assemble_numbered(
    lines: Iterable[Tuple[int, str]],
    *,
    filename: str | None = None,
    symtab: SymbolTable | None = None,
) -> Tuple[list, LinkResult, EncodeResult]:
    """Parsea, hace PASADA 1 y PASADA 2 sobre líneas (lineno, texto) ya limpias.
    Devuelve (nodes, link_result, enc_result). Cualquier error aborta con excepción."""
    nodes = parse(lines, filename=filename)
    link = first_pass(nodes, symtab=symtab, filename=filename)
    enc = encode(nodes, link.symtab, filename=filename)
    return nodes, link, enc

def assemble(lines: Iterable[str], *, filename: str | None = None) -> List[str]:
    """Ensambla líneas recortadas y sin comentarios; devuelve palabras '0'/'1' de 16 caracteres."""
    _, _, enc = assemble_numbered(number_lines(lines), filename=filename)
    return to_bin_lines(enc.words)

def assemble_text(text: str, *, filename: str | None = None) -> Tuple[list, LinkResult, EncodeResult]:
    """Como assemble_numbered, quitando antes comentarios '//' y líneas en blanco."""
    return assemble_numbered(clean_lines(text), filename=filename)

def out_path(path: str) -> str:
    """'dir/Prog.asm' -> 'dir/Prog.hack'."""
    root, ext = os.path.splitext(path)
    if ext != ".asm":
        raise ResourceError(f"el archivo debe tener extensión .asm: {path}")
    return root + ".hack"

def format_symbols(symtab: SymbolTable) -> List[str]:
    out = []
    for kind, table in (("label", symtab.labels()), ("var", symtab.variables())):
        for name, addr in sorted(table.items(), key=lambda kv: kv[1]):
            out.append(f"{addr:5d}  {kind:<5s}  {name}")
    return out

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Hack two-pass assembler")
    ap.add_argument("source", help="archivo .asm de entrada")
    ap.add_argument("-o", "--output", help="archivo de salida (por defecto: mismo nombre con .hack)")
    ap.add_argument("--symbols", action="store_true", help="lista etiquetas y variables al terminar")
    args = ap.parse_args(argv)

    try:
        dest = args.output or out_path(args.source)
    except ResourceError as ex:
        print(ex, file=sys.stderr)
        return 2

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    try:
        nodes, link, enc = assemble_text(text, filename=args.source)
    except ToolchainError as ex:
        print(ex, file=sys.stderr)
        return 1

    try:
        write_bin(enc.words, dest)
    except ResourceError as ex:
        print(ex, file=sys.stderr)
        return 3

    if args.symbols:
        for line in format_symbols(link.symtab):
            print(line)

    print(f"OK: {len(enc.words)} instrucciones → {dest}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
