from __future__ import annotations
import argparse, os, sys
from typing import Iterable, List

from .lexer import clean_lines, number_lines
from .vm_parser import parse
from .commands import Command
from .codegen import CodegenContext, generate, halt as halt_code
from .writers import write_text
from .diagnostics import ToolchainError, ResourceError

def translate(
    commands: Iterable[Command],
    ctx: CodegenContext,
    *,
    filename: str | None = None,
    halt: bool = False,
) -> str:
    """Concatena en orden los fragmentos de cada comando (y el bucle final si halt)."""
    parts: List[str] = []
    for cmd in commands:
        try:
            parts.append(generate(cmd, ctx))
        except ToolchainError as ex:
            raise ex.at(line=cmd.line or None, file=filename, source=str(cmd))
    if halt:
        parts.append(halt_code(ctx))
    return "".join(parts)

def translate_lines(lines: Iterable[str], unit: str, *, annotate: bool = False,
                    halt: bool = False) -> List[str]:
    """Traduce líneas VM limpias; devuelve las líneas de ensamblador resultantes."""
    ctx = CodegenContext(unit=unit, annotate=annotate)
    commands = parse(number_lines(lines))
    return translate(commands, ctx, halt=halt).splitlines()

def translate_text(text: str, unit: str, *, filename: str | None = None,
                   annotate: bool = True, halt: bool = False) -> str:
    """Quita comentarios y líneas en blanco, parsea y genera el ensamblador completo."""
    ctx = CodegenContext(unit=unit, annotate=annotate)
    commands = parse(clean_lines(text), filename=filename)
    return translate(commands, ctx, filename=filename, halt=halt)

def unit_name(path: str) -> str:
    """'dir/Main.vm' -> 'Main'. El nombre debe empezar en mayúscula y tener extensión .vm."""
    base = os.path.basename(path)
    stem, ext = os.path.splitext(base)
    if ext != ".vm":
        raise ResourceError(f"el archivo debe tener extensión .vm: {path}")
    if not stem[:1].isupper():
        raise ResourceError(f"el nombre del archivo debe empezar en mayúscula: {path}")
    return stem

def out_path(path: str) -> str:
    """'dir/Main.vm' -> 'dir/Main.asm'."""
    unit_name(path)
    return os.path.splitext(path)[0] + ".asm"

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Hack VM -> assembly translator")
    ap.add_argument("source", help="archivo .vm de entrada (nombre en mayúscula inicial)")
    ap.add_argument("-o", "--output", help="archivo de salida (por defecto: mismo nombre con .asm)")
    ap.add_argument("--halt", action="store_true", help="añade un bucle infinito al final")
    ap.add_argument("--no-comments", action="store_true", help="no anota el ensamblador generado")
    args = ap.parse_args(argv)

    try:
        unit = unit_name(args.source)
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
        asm = translate_text(text, unit, filename=args.source,
                             annotate=not args.no_comments, halt=args.halt)
    except ToolchainError as ex:
        print(ex, file=sys.stderr)
        return 1

    try:
        write_text(asm, dest)
    except ResourceError as ex:
        print(ex, file=sys.stderr)
        return 3

    print(f"OK: {len(asm.splitlines())} líneas → {dest}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
