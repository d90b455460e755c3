import pytest
from src.hack_toolchain.vm_translator import translate_text, static_prefix, main
from src.hack_toolchain.assembler import assemble_text
from src.hack_toolchain.writers import to_bin_lines
from src.hack_toolchain.diagnostics import HackError

def _run(vm_src, hack_cpu, ram=None, stem="Test"):
    cmds, diags, lines = translate_text(vm_src, file_stem=stem)
    assert not diags
    _, adiags, _, enc = assemble_text("\n".join(lines))
    assert not adiags
    init = {0: 256}
    init.update(ram or {})
    return hack_cpu(to_bin_lines(enc.words), ram=init).run()

def test_simple_add(hack_cpu):
    cpu = _run("push constant 7\npush constant 8\nadd\n", hack_cpu)
    assert cpu.ram[0] == 257
    assert cpu.ram[256] == 15

def test_stack_arithmetic(hack_cpu):
    src = """
    push constant 17
    push constant 17
    eq
    push constant 892
    push constant 891
    lt
    push constant 32767
    push constant 32766
    gt
    push constant 57
    push constant 31
    push constant 53
    add
    push constant 112
    sub
    neg
    and
    push constant 82
    or
    not
    """
    cpu = _run(src, hack_cpu)
    assert cpu.ram[0] == 260
    assert cpu.ram[256:260] == [0xFFFF, 0, 0xFFFF, 0xFFA5]  # -1, 0, -1, -91

def test_memory_segments(hack_cpu):
    src = """
    push constant 10
    pop local 0
    push constant 21
    push constant 22
    pop argument 2
    pop argument 1
    push constant 36
    pop this 6
    push constant 42
    push constant 45
    pop that 5
    pop that 2
    push constant 510
    pop temp 6
    push local 0
    push that 5
    add
    push argument 1
    sub
    push this 6
    push this 6
    add
    sub
    push temp 6
    add
    """
    ram = {1: 300, 2: 400, 3: 3000, 4: 3010}
    cpu = _run(src, hack_cpu, ram=ram)
    assert cpu.ram[0] == 257
    assert cpu.ram[256] == 472
    assert cpu.ram[300] == 10
    assert cpu.ram[401:403] == [21, 22]
    assert cpu.ram[3006] == 36
    assert cpu.ram[3012] == 42 and cpu.ram[3015] == 45
    assert cpu.ram[11] == 510

def test_pointer_and_static(hack_cpu):
    src = """
    push constant 3030
    pop pointer 0
    push constant 3040
    pop pointer 1
    push constant 32
    pop this 2
    push constant 46
    pop that 6
    push pointer 0
    push pointer 1
    add
    push constant 111
    pop static 8
    push static 8
    add
    """
    cpu = _run(src, hack_cpu)
    assert cpu.ram[3] == 3030 and cpu.ram[4] == 3040
    assert cpu.ram[3032] == 32 and cpu.ram[3046] == 46
    assert cpu.ram[256] == 6070 + 111
    # Test.8 es la primera variable
    assert cpu.ram[16] == 111

def test_two_comparisons_do_not_share_labels():
    _, diags, lines = translate_text("push constant 1\npush constant 1\neq\npush constant 2\neq\n",
                                     file_stem="Cmp")
    assert not diags
    labels = [l for l in lines if l.startswith("(")]
    assert len(labels) == len(set(labels)) == 4
    _, adiags, _, _ = assemble_text("\n".join(lines))
    assert not adiags

def test_static_prefix():
    assert static_prefix("dir/Foo.vm") == "Foo"
    with pytest.raises(HackError) as ex:
        static_prefix("dir/1bad name.vm")
    assert ex.value.diagnostic.kind == "NamespaceCollision"

def test_main_writes_asm(tmp_path, capsys):
    src = tmp_path / "Simple.vm"
    src.write_text("push constant 2\npop static 0\n", encoding="utf-8")
    assert main([str(src)]) == 0
    asm = (tmp_path / "Simple.asm").read_text(encoding="utf-8").splitlines()
    assert asm[0] == "@2 // push constant 2"
    assert "@Simple.0" in asm
    assert "OK: 2 comandos" in capsys.readouterr().out

def test_main_rejects_colliding_static_prefix(tmp_path, capsys):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    first = tmp_path / "a" / "Foo.vm"
    second = tmp_path / "b" / "Foo.vm"
    first.write_text("push constant 1\n", encoding="utf-8")
    second.write_text("push constant 2\n", encoding="utf-8")
    assert main([str(first), str(second)]) == 1
    assert (tmp_path / "a" / "Foo.asm").exists()
    assert not (tmp_path / "b" / "Foo.asm").exists()
    assert "NamespaceCollision" in capsys.readouterr().err

def test_main_bad_file_produces_no_output(tmp_path):
    src = tmp_path / "Bad.vm"
    src.write_text("push constant 1\npush temp 8\n", encoding="utf-8")
    assert main([str(src)]) == 1
    assert not (tmp_path / "Bad.asm").exists()

def test_translate_text_reports_bad_file_name_as_diagnostic():
    cmds, diags, lines = translate_text("push constant 1\n", filename="dir/1bad name.vm")
    assert cmds == [] and lines == []
    assert [d.kind for d in diags] == ["NamespaceCollision"]
