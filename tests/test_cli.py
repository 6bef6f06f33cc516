import pytest

from no2cc.cli import compile_source, main
from no2cc.errors import CompileError

HEADER = [".intel_syntax noprefix", ".globl main", "main:", "  push rbp", "  mov rbp, rsp"]
EPILOGUE = ["  mov rsp, rbp", "  pop rbp", "  ret"]


def lines_of(text):
    return text.splitlines()


def test_stack_mode_single_number():
    out = lines_of(compile_source("42;", False, False))
    assert out == HEADER + ["  sub rsp, 0", "  push 42", "  pop rax"] + EPILOGUE


def test_output_ends_with_newline_and_epilogue():
    text = compile_source("1 + 2;", False, False)
    assert text.endswith("  ret\n")
    assert lines_of(text)[:5] == HEADER


def test_stack_size_is_aligned_to_sixteen():
    out = lines_of(compile_source("a = 1; b = 2; c = 3;", False, False))
    size = int(out[5].split(",")[1])
    assert size % 16 == 0
    assert size >= 3 * 8


def test_return_statement_not_popped():
    out = lines_of(compile_source("return 5;", False, False))
    body = out[6:]
    assert body[0] == "  push 5"
    assert body[1] == "  pop rax"
    assert body[2:5] == EPILOGUE


def test_ir_mode_return_addition(capsys):
    out = lines_of(compile_source("return 1 + 2;", True, False))
    assert out[6:] == [
        "  mov rdi, 1",
        "  mov rsi, 2",
        "  add rdi, rsi",
        "  mov rax, rdi",
        *EPILOGUE,
        *EPILOGUE,
    ]
    err = capsys.readouterr().err
    assert "[DEBUG] IR:" in err
    assert "[DEBUG] vreg_to_reg" in err


def test_debug_writes_tokens_and_nodes(capsys):
    compile_source("1;", False, True)
    err = capsys.readouterr().err
    assert "[DEBUG] tokens" in err
    assert "[DEBUG] node" in err


def test_no_debug_output_in_stack_mode(capsys):
    compile_source("1;", False, False)
    assert capsys.readouterr().err == ""


def test_compile_source_raises_on_missing_semicolon():
    with pytest.raises(CompileError):
        compile_source("1 + 2", False, False)


def test_main_prints_assembly(capsys):
    assert main(["7;"]) == 0
    out = capsys.readouterr().out
    assert lines_of(out)[0] == ".intel_syntax noprefix"
    assert "  push 7" in lines_of(out)


def test_main_ir_flag(capsys):
    assert main(["-i", "return 3;"]) == 0
    out = lines_of(capsys.readouterr().out)
    assert "  mov rdi, 3" in out


def test_main_reports_parse_error(capsys):
    assert main(["1 +;"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "^" in captured.err


def test_main_reports_tokenize_error(capsys):
    assert main(["1 @ 2;"]) == 1
    assert "1 @ 2;" in capsys.readouterr().err


def test_main_reports_bad_assignment(capsys):
    assert main(["1 = 2;"]) == 1
    assert capsys.readouterr().out == ""