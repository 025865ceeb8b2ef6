import pytest
from hack_toolchain.translator import main, out_path, translate_lines, translate_text, unit_name
from hack_toolchain.assembler import assemble, assemble_text
from hack_toolchain.cpu import HackCPU
from hack_toolchain.diagnostics import IllegalPop, InvalidSegmentIndex, ResourceError

SP0, LCL0, ARG0, THIS0, THAT0 = 256, 300, 400, 3000, 3010

def _run(vm_src: str, unit: str = "Main"):
    """Traduce, ensambla y ejecuta hasta el bucle final."""
    asm = translate_text(vm_src, unit, halt=True)
    _, link, enc = assemble_text(asm)
    cpu = HackCPU([w.word for w in enc.words])
    cpu.ram[0], cpu.ram[1], cpu.ram[2], cpu.ram[3], cpu.ram[4] = SP0, LCL0, ARG0, THIS0, THAT0
    cpu.run(max_steps=10_000, until_pc=link.symtab.lookup("INFINITE_LOOP"))
    return cpu, link

def test_e2e_push_add_pop_local():
    cpu, _ = _run("push constant 7\npush constant 8\nadd\npop local 0\n")
    assert cpu.ram_value(LCL0) == 15
    assert cpu.ram[0] == SP0

@pytest.mark.parametrize("a, b, op, expected", [
    (7, 7, "eq", -1), (7, 8, "eq", 0),
    (9, 8, "gt", -1), (8, 9, "gt", 0),
    (3, 8, "lt", -1), (8, 3, "lt", 0),
    (9, 4, "sub", 5), (12, 10, "and", 8), (12, 10, "or", 14),
])
def test_e2e_binary_ops(a, b, op, expected):
    cpu, _ = _run(f"push constant {a}\npush constant {b}\n{op}\n")
    assert cpu.ram[0] == SP0 + 1
    assert cpu.ram_value(SP0) == expected

@pytest.mark.parametrize("op, expected", [("neg", -5), ("not", ~5)])
def test_e2e_unary_ops(op, expected):
    cpu, _ = _run(f"push constant 5\n{op}\n")
    assert cpu.ram[0] == SP0 + 1
    assert cpu.ram_value(SP0) == expected

def test_e2e_many_comparisons():
    src = "\n".join(["push constant 1", "push constant 1", "eq"] * 5 +
                    ["and", "and", "and", "and"])
    cpu, link = _run(src)
    assert cpu.ram_value(SP0) == -1
    assert link.symtab.lookup("CMP_TRUE.4") is not None

def test_e2e_segments():
    src = """
    push constant 10
    pop argument 1
    push constant 3030
    pop pointer 0
    push constant 3040
    pop pointer 1
    push constant 36
    pop this 6
    push constant 42
    pop that 5
    push constant 510
    pop temp 6
    push constant 99
    pop static 2
    push argument 1
    push this 6
    add
    push that 5
    add
    push temp 6
    add
    push static 2
    add
    push pointer 0
    push pointer 1
    sub
    add
    """
    cpu, link = _run(src, unit="Seg")
    assert cpu.ram_value(ARG0 + 1) == 10
    assert cpu.ram[3] == 3030 and cpu.ram[4] == 3040
    assert cpu.ram_value(3036) == 36
    assert cpu.ram_value(3045) == 42
    assert cpu.ram_value(11) == 510
    assert link.symtab.lookup("Seg.2") == 16
    assert cpu.ram_value(16) == 99
    assert cpu.ram_value(SP0) == 10 + 36 + 42 + 510 + 99 - 10
    assert cpu.ram[0] == SP0 + 1

def test_translate_lines_is_comment_free():
    out = translate_lines(["push constant 1", "push constant 2", "lt"], "Main")
    assert not any(l.startswith("//") for l in out)
    assert len(assemble(out)) > 0

def test_errors_carry_line():
    with pytest.raises(IllegalPop) as info:
        translate_text("push constant 1\npop constant 0\n", "Main", filename="Main.vm")
    assert info.value.diagnostic.line == 2
    with pytest.raises(InvalidSegmentIndex) as info:
        translate_text("push temp 8\n", "Main", filename="Main.vm")
    assert info.value.diagnostic.line == 1

def test_unit_name_and_out_path():
    assert unit_name("dir/Main.vm") == "Main"
    assert out_path("dir/Main.vm") == "dir/Main.asm"
    with pytest.raises(ResourceError):
        unit_name("dir/main.vm")
    with pytest.raises(ResourceError):
        out_path("dir/Main.txt")

def test_cli(tmp_path, capsys):
    src = tmp_path / "Prog.vm"
    src.write_text("// prog\npush constant 7\npush static 0\neq\n", encoding="utf-8")
    assert main([str(src), "--halt", "--no-comments"]) == 0
    asm = (tmp_path / "Prog.asm").read_text(encoding="utf-8")
    assert "@Prog.0" in asm
    assert "(INFINITE_LOOP)" in asm
    assert "//" not in asm
    assert assemble(asm.splitlines())
    assert "OK:" in capsys.readouterr().out

def test_cli_failure_leaves_no_output(tmp_path, capsys):
    src = tmp_path / "Prog.vm"
    src.write_text("pop constant 1\n", encoding="utf-8")
    assert main([str(src)]) == 1
    assert not (tmp_path / "Prog.asm").exists()
    assert "Prog.vm:1: ERROR:" in capsys.readouterr().err

def test_cli_rejects_lowercase_name(tmp_path):
    src = tmp_path / "prog.vm"
    src.write_text("add\n", encoding="utf-8")
    assert main([str(src)]) == 2
