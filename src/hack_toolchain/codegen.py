# src/hack_toolchain/codegen.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

from .commands import Arithmetic, ArithOp, BASE_REGISTER, Command, Pop, Push, Segment
from .lexer import symbol_problem
from .diagnostics import IllegalPop, InvalidSegmentIndex, ParseError

TEMP_BASE = 5
TEMP_SIZE = 8
SCRATCH = "R13"
HALT_LABEL = "INFINITE_LOOP"

# Paso de código: (comentario, líneas de ensamblador)
Step = Tuple[str, List[str]]

# Expresión comp para '*SP := *SP op D'
BINARY_COMP = {
    ArithOp.ADD: "D+M",
    ArithOp.SUB: "M-D",
    ArithOp.AND: "D&M",
    ArithOp.OR: "D|M",
}
UNARY_COMP = {
    ArithOp.NEG: "-M",
    ArithOp.NOT: "!M",
}
COMPARE_JUMP = {
    ArithOp.EQ: "JEQ",
    ArithOp.GT: "JGT",
    ArithOp.LT: "JLT",
}

@dataclass
class CodegenContext:
    """Estado de una ejecución de traducción.

    - unit: nombre de la unidad (archivo sin extensión); prefijo de los símbolos static
    - label_prefix: prefijo de las etiquetas de comparación
    - annotate: si True, cada fragmento lleva comentarios '//' por paso
    - counter: siguiente número para etiquetas de comparación

    Cada contexto es independiente; dos ejecuciones no comparten contador.
    """
    unit: str
    label_prefix: str = "CMP"
    annotate: bool = True
    counter: int = 0

    def __post_init__(self):
        for name in (self.unit, self.label_prefix):
            problem = symbol_problem(name)
            if problem:
                raise ParseError(f"Nombre no utilizable en símbolos: {problem}")

    def next_label_id(self) -> int:
        n = self.counter
        self.counter += 1
        return n

    def static_symbol(self, index: int) -> str:
        return f"{self.unit}.{index}"

# ---------- Helpers ----------

def _render(ctx: CodegenContext, title: str, steps: List[Step]) -> str:
    out: List[str] = []
    if ctx.annotate:
        out.append(f"// {title}")
    for comment, code in steps:
        if ctx.annotate and comment:
            out.append(f"// {comment}")
        out.extend(code)
    return "\n".join(out) + "\n"

def _sp_dec() -> Step:
    return ("SP--", ["@SP", "M=M-1"])

def _sp_inc() -> Step:
    return ("SP++", ["@SP", "M=M+1"])

def _pointer_register(index: int) -> str:
    if index == 0:
        return "THIS"
    if index == 1:
        return "THAT"
    raise InvalidSegmentIndex(f"Índice inválido para el segmento pointer: {index}", hint="0 (THIS) o 1 (THAT)")

def _temp_address(index: int) -> int:
    if not 0 <= index < TEMP_SIZE:
        raise InvalidSegmentIndex(f"Índice inválido para el segmento temp: {index}", hint="0..7")
    return TEMP_BASE + index

# ---------- push / pop ----------

def _push(cmd: Push, ctx: CodegenContext) -> List[Step]:
    seg, i = cmd.segment, cmd.index
    if seg is Segment.CONSTANT:
        load: Step = (f"D := {i}", [f"@{i}", "D=A"])
    elif seg in BASE_REGISTER:
        base = BASE_REGISTER[seg]
        load = (f"D := *({base} + {i})", [f"@{base}", "D=M", f"@{i}", "A=D+A", "D=M"])
    elif seg is Segment.POINTER:
        reg = _pointer_register(i)
        load = (f"D := {reg}", [f"@{reg}", "D=M"])
    elif seg is Segment.TEMP:
        addr = _temp_address(i)
        load = (f"D := RAM[{addr}]", [f"@{addr}", "D=M"])
    elif seg is Segment.STATIC:
        sym = ctx.static_symbol(i)
        load = (f"D := {sym}", [f"@{sym}", "D=M"])
    else:
        raise ParseError(f"Segmento no soportado en push: {seg!r}")
    return [load, ("*SP := D", ["@SP", "A=M", "M=D"]), _sp_inc()]

def _pop(cmd: Pop, ctx: CodegenContext) -> List[Step]:
    seg, i = cmd.segment, cmd.index
    if seg is Segment.CONSTANT:
        raise IllegalPop(f"No se puede hacer pop al segmento constant: {cmd}")
    elif seg in BASE_REGISTER:
        base = BASE_REGISTER[seg]
        addr: Step = (f"{SCRATCH} := {base} + {i}", [f"@{base}", "D=M", f"@{i}", "D=D+A"])
    elif seg is Segment.POINTER:
        reg = _pointer_register(i)
        addr = (f"{SCRATCH} := &{reg}", [f"@{reg}", "D=A"])
    elif seg is Segment.TEMP:
        target = _temp_address(i)
        addr = (f"{SCRATCH} := {target}", [f"@{target}", "D=A"])
    elif seg is Segment.STATIC:
        sym = ctx.static_symbol(i)
        addr = (f"{SCRATCH} := &{sym}", [f"@{sym}", "D=A"])
    else:
        raise ParseError(f"Segmento no soportado en pop: {seg!r}")
    comment, code = addr
    return [
        _sp_dec(),
        (comment, code + [f"@{SCRATCH}", "M=D"]),
        (f"*{SCRATCH} := *SP", ["@SP", "A=M", "D=M", f"@{SCRATCH}", "A=M", "M=D"]),
    ]

# ---------- aritmética ----------

def _binary_prologue() -> List[Step]:
    return [_sp_dec(), ("D := *SP", ["A=M", "D=M"]), _sp_dec()]

def _arithmetic(cmd: Arithmetic, ctx: CodegenContext) -> List[Step]:
    op = cmd.op
    if op in UNARY_COMP:
        expr = UNARY_COMP[op]
        return [(f"*(SP-1) := {expr.replace('M', '*(SP-1)')}", ["@SP", "A=M-1", f"M={expr}"])]

    if op in BINARY_COMP:
        expr = BINARY_COMP[op]
        return _binary_prologue() + [
            (f"*SP := {expr.replace('M', '*SP')}", ["A=M", f"M={expr}"]),
            _sp_inc(),
        ]

    if op in COMPARE_JUMP:
        n = ctx.next_label_id()
        true_label = f"{ctx.label_prefix}_TRUE.{n}"
        end_label = f"{ctx.label_prefix}_END.{n}"
        return _binary_prologue() + [
            ("D := *SP - D", ["A=M", "D=M-D"]),
            ("salta al caso verdadero", [f"@{true_label}", f"D;{COMPARE_JUMP[op]}"]),
            ("*SP := false", ["@SP", "A=M", "M=0"]),
            ("fin de la comparación", [f"@{end_label}", "0;JMP"]),
            ("*SP := true", [f"({true_label})", "@SP", "A=M", "M=-1"]),
            ("", [f"({end_label})"]),
            _sp_inc(),
        ]

    raise ParseError(f"Operación aritmética no soportada: {op!r}")

# ---------- API ----------

def generate(cmd: Command, ctx: CodegenContext) -> str:
    """Fragmento de ensamblador para un comando; concatenarlos en orden da el programa."""
    if isinstance(cmd, Push):
        steps = _push(cmd, ctx)
    elif isinstance(cmd, Pop):
        steps = _pop(cmd, ctx)
    elif isinstance(cmd, Arithmetic):
        steps = _arithmetic(cmd, ctx)
    else:
        raise TypeError(f"No es un comando VM: {cmd!r}")
    return _render(ctx, str(cmd), steps)

def halt(ctx: CodegenContext | None = None) -> str:
    """Bucle infinito final, para que la CPU no ejecute memoria vacía."""
    lines = [f"({HALT_LABEL})", f"@{HALT_LABEL}", "0;JMP"]
    if ctx is None or ctx.annotate:
        lines.insert(0, "// halt")
    return "\n".join(lines) + "\n"
