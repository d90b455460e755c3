from src.hack_toolchain.diagnostics import error, warning, HackError, has_errors

def test_error_str():
    d = error("dirección fuera de rango", line=12, col=1, file="prog.asm",
              hint="use 0..32767", kind="ValueOutOfRange")
    s = str(d)
    assert "prog.asm:12:1:" in s
    assert "ERROR[ValueOutOfRange]: dirección fuera de rango" in s
    assert "(pista: use 0..32767)" in s

def test_located_keeps_existing_location():
    d = error("x", line=3).located(line=9, col=2, file="a.asm")
    assert (d.line, d.col, d.file) == (3, 2, "a.asm")

def test_hack_error_carries_diagnostic():
    d = error("malo", kind="MalformedLine")
    ex = HackError(d)
    assert ex.diagnostic is d
    assert "malo" in str(ex)

def test_has_errors_ignores_warnings():
    assert not has_errors([warning("w")])
    assert has_errors([warning("w"), error("e")])
