import pytest
from hack_toolchain.assembler import assemble, assemble_text, format_symbols, main, out_path
from hack_toolchain.cpu import HackCPU
from hack_toolchain.encoding import decode_instruction, to_asm
from hack_toolchain.utils import from_bin16
from hack_toolchain.diagnostics import DuplicateSymbol, ParseError, ResourceError

ADD_SRC = ["@2", "D=A", "@3", "D=D+A", "@0", "M=D"]

def test_e2e_add():
    words = assemble(ADD_SRC)
    assert words == [
        "0000000000000010",
        "1110110000010000",
        "0000000000000011",
        "1110000010010000",
        "0000000000000000",
        "1110001100001000",
    ]
    # la semántica decodificada calcula 2+3 y lo guarda en RAM[0]
    assert [to_asm(decode_instruction(from_bin16(w))) for w in words] == ADD_SRC
    cpu = HackCPU([from_bin16(w) for w in words])
    cpu.run()
    assert cpu.ram_value(0) == 5

def test_forward_label_and_variables():
    src = """
    // cuenta i de 0 a 3
    @i
    M=0
    (LOOP)
    @i
    D=M
    @3
    D=D-A
    @END
    D;JGE
    @i
    M=M+1
    @LOOP
    0;JMP
    (END)
    @END
    0;JMP
    """
    nodes, link, enc = assemble_text(src, filename="Count.asm")
    assert link.symtab.lookup("LOOP") == 2
    assert link.symtab.lookup("END") == 12
    assert link.symtab.lookup("i") == 16
    cpu = HackCPU([w.word for w in enc.words])
    cpu.run(max_steps=500, until_pc=12)
    assert cpu.pc == 12
    assert cpu.ram_value(16) == 3

def test_labels_emit_nothing():
    assert len(assemble(["(A)", "(B)", "@A", "(C)", "0;JMP"])) == 2

def test_error_aborts_with_location():
    src = "@1\n(X)\nD=A\n(X)\n"
    with pytest.raises(DuplicateSymbol) as info:
        assemble_text(src, filename="Dup.asm")
    assert info.value.diagnostic.line == 4
    assert info.value.diagnostic.file == "Dup.asm"

def test_format_symbols():
    _, link, _ = assemble_text("@x\n(L)\n@y\n")
    assert format_symbols(link.symtab) == [
        "    1  label  L",
        "   16  var    x",
        "   17  var    y",
    ]

def test_out_path():
    assert out_path("dir/Prog.asm") == "dir/Prog.hack"
    with pytest.raises(ResourceError):
        out_path("dir/Prog.txt")

def test_cli_writes_hack_file(tmp_path, capsys):
    src = tmp_path / "Add.asm"
    src.write_text("// add\n" + "\n".join(ADD_SRC) + "\n", encoding="utf-8")
    assert main([str(src)]) == 0
    out = (tmp_path / "Add.hack").read_text(encoding="utf-8")
    assert out.splitlines() == assemble(ADD_SRC)
    assert out.endswith("\n")
    assert "OK: 6 instrucciones" in capsys.readouterr().out

def test_cli_error_leaves_no_output(tmp_path, capsys):
    src = tmp_path / "Bad.asm"
    src.write_text("@1\nD=Q\n", encoding="utf-8")
    assert main([str(src)]) == 1
    assert not (tmp_path / "Bad.hack").exists()
    err = capsys.readouterr().err
    assert "Bad.asm:2: ERROR: Expresión comp no reconocida" in err

def test_cli_bad_extension_and_missing_file(tmp_path):
    assert main([str(tmp_path / "x.txt")]) == 2
    assert main([str(tmp_path / "missing.asm")]) == 2

def test_cli_write_failure(tmp_path):
    src = tmp_path / "Add.asm"
    src.write_text("\n".join(ADD_SRC), encoding="utf-8")
    dest = tmp_path / "no_such_dir" / "Add.hack"
    assert main([str(src), "-o", str(dest)]) == 3
    assert not dest.exists()
