'''
simulador mínimo de la CPU Hack (ROM de palabras codificadas + RAM de 32K)
'''

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Sequence

from .ast import AInstruction, CInstruction, Jump
from .encoding import decode_instruction
from .utils import u16, sign_extend, ADDRESS_LIMIT, ADDR_MASK

# comp canónica -> f(D, Y) donde Y es A o M según el bit a
ALU: Dict[str, Callable[[int, int], int]] = {
    "0": lambda d, y: 0,
    "1": lambda d, y: 1,
    "-1": lambda d, y: -1,
    "D": lambda d, y: d,
    "A": lambda d, y: y,
    "M": lambda d, y: y,
    "!D": lambda d, y: ~d,
    "!A": lambda d, y: ~y,
    "!M": lambda d, y: ~y,
    "-D": lambda d, y: -d,
    "-A": lambda d, y: -y,
    "-M": lambda d, y: -y,
    "D+1": lambda d, y: d + 1,
    "A+1": lambda d, y: y + 1,
    "M+1": lambda d, y: y + 1,
    "D-1": lambda d, y: d - 1,
    "A-1": lambda d, y: y - 1,
    "M-1": lambda d, y: y - 1,
    "D+A": lambda d, y: d + y,
    "D+M": lambda d, y: d + y,
    "D-A": lambda d, y: d - y,
    "D-M": lambda d, y: d - y,
    "A-D": lambda d, y: y - d,
    "M-D": lambda d, y: y - d,
    "D&A": lambda d, y: d & y,
    "D&M": lambda d, y: d & y,
    "D|A": lambda d, y: d | y,
    "D|M": lambda d, y: d | y,
}

def _jumps(jump: Jump, out: int) -> bool:
    v = sign_extend(out, 16)
    if jump is Jump.NEVER:
        return False
    if jump is Jump.GT:
        return v > 0
    if jump is Jump.EQ:
        return v == 0
    if jump is Jump.GE:
        return v >= 0
    if jump is Jump.LT:
        return v < 0
    if jump is Jump.NE:
        return v != 0
    if jump is Jump.LE:
        return v <= 0
    if jump is Jump.ALWAYS:
        return True
    raise ValueError(f"Salto desconocido: {jump!r}")

class HackCPU:
    """CPU Hack: registros A, D y PC; RAM de palabras de 16 bits sin signo."""

    def __init__(self, rom: Sequence[int], *, ram_size: int = ADDRESS_LIMIT):
        self.rom: List[int] = list(rom)
        self.program = [decode_instruction(w) for w in self.rom]
        self.ram: List[int] = [0] * ram_size
        self.a = 0
        self.d = 0
        self.pc = 0
        self.steps = 0

    def ram_value(self, addr: int) -> int:
        """Valor con signo (complemento a dos) de RAM[addr]."""
        return sign_extend(self.ram[addr], 16)

    def step(self) -> None:
        ins = self.program[self.pc]
        self.steps += 1
        if isinstance(ins, AInstruction):
            self.a = ins.value
            self.pc += 1
            return
        assert isinstance(ins, CInstruction)
        addr = self.a & ADDR_MASK     # la RAM y la ROM se direccionan con 15 bits
        y = self.ram[addr] if ins.comp.a_bit else self.a
        out = u16(ALU[ins.comp.expr](self.d, y))
        if ins.dest.m:
            self.ram[addr] = out
        if ins.dest.a:
            self.a = out
        if ins.dest.d:
            self.d = out
        if _jumps(ins.jump, out):
            self.pc = addr
        else:
            self.pc += 1

    def run(self, max_steps: int = 100_000, *, until_pc: Optional[int] = None) -> int:
        """Ejecuta hasta salir de la ROM, llegar a until_pc o agotar max_steps.
        Devuelve el número de pasos ejecutados en esta llamada."""
        start = self.steps
        while 0 <= self.pc < len(self.program) and self.steps - start < max_steps:
            if until_pc is not None and self.pc == until_pc:
                break
            self.step()
        return self.steps - start
