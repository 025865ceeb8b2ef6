import pytest
from hack_toolchain.diagnostics import error, DuplicateSymbol, ParseError, ToolchainError

def test_error_str():
    d = error("literal fuera de rango", line=12, col=8, file="prog.asm", hint="menor que 32768")
    s = str(d)
    assert "prog.asm:12:8:" in s
    assert "ERROR: literal fuera de rango" in s
    assert "(pista: menor que 32768)" in s

def test_exception_carries_location():
    ex = DuplicateSymbol("Símbolo redefinido: 'LOOP'").at(line=7, file="Prog.asm", source="(LOOP)")
    assert isinstance(ex, ToolchainError) and isinstance(ex, ValueError)
    assert ex.diagnostic.line == 7
    s = str(ex)
    assert s.startswith("Prog.asm:7: ERROR: Símbolo redefinido")
    assert "(LOOP)" in s

def test_at_keeps_first_location():
    ex = ParseError("x").at(line=3)
    ex.at(line=9, file="a.asm")
    assert ex.diagnostic.line == 3
    assert ex.diagnostic.file == "a.asm"

def test_raise_and_catch_as_toolchain_error():
    with pytest.raises(ToolchainError):
        raise ParseError("Línea vacía")
