import pytest
from hack_toolchain.parser import parse
from hack_toolchain.linker import first_pass
from hack_toolchain.lexer import clean_lines
from hack_toolchain.ast import CInstruction
from hack_toolchain.isa import comp
from hack_toolchain.diagnostics import DuplicateSymbol, TooManyInstructions

def test_labels_point_to_next_instruction():
    src = """
    (START)
    @i
    M=1
    (LOOP)
    (ALSO_LOOP)
    @LOOP
    0;JMP
    (END)
    """
    nodes = parse(clean_lines(src))
    r = first_pass(nodes)
    assert r.symtab.lookup("START") == 0
    # 2 instrucciones antes de LOOP
    assert r.symtab.lookup("LOOP") == 2
    assert r.symtab.lookup("ALSO_LOOP") == 2
    assert r.symtab.lookup("END") == 4
    assert r.text_size == 4
    # las variables se reservan en la pasada 2
    assert r.symtab.lookup("i") is None

def test_duplicate_label_reports_line():
    src = "(L)\n@0\n(L)\n"
    nodes = parse(clean_lines(src))
    with pytest.raises(DuplicateSymbol) as info:
        first_pass(nodes, filename="dup.asm")
    assert info.value.diagnostic.line == 3
    assert "redefinido" in info.value.diagnostic.message

def test_too_many_instructions():
    nop = CInstruction(comp=comp("0"))
    first_pass([nop] * ((1 << 15) - 1))
    with pytest.raises(TooManyInstructions):
        first_pass([nop] * (1 << 15))
