"""Command-line entry point: compile a source string to x86-64 assembly."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .codegen import CodegenContext, generate_statement
from .errors import CompileError
from .gen_x64 import Generator
from .ir.gen_ir import GenIrContext, node_to_ir
from .ir.types import Instruction
from .lexer import TokenStream, tokenize
from .parser import Parser
from .reg_alloc.interval_analysis import scan_interval
from .reg_alloc.register_allocation import linear_reg_alloc

# Only caller-saved registers are handed to the allocator.
_ALLOC_REGS = ("rdi", "rsi", "rcx", "r8", "r9", "r10", "r11")
_EPILOGUE = ("  mov rsp, rbp", "  pop rbp", "  ret")


def _debug(*lines: object) -> None:
    for line in lines:
        print(line, file=sys.stderr)


def _ir_body(nodes: list) -> list[str]:
    codes: list[Instruction] = []
    context = GenIrContext()
    _debug("[DEBUG] IR:")
    for node in nodes:
        node_to_ir(node, context)
        _debug(*context.code)
        codes.extend(context.code)
        context.code.clear()

    intervals = scan_interval(codes)
    _debug("[DEBUG] intervals", intervals)
    vreg_to_reg = linear_reg_alloc(intervals, len(_ALLOC_REGS))
    _debug("[DEBUG] vreg_to_reg", vreg_to_reg)
    return Generator(_ALLOC_REGS, codes).gen_all(vreg_to_reg)


def _stack_body(nodes: list) -> list[str]:
    context = CodegenContext()
    return [line for node in nodes for line in generate_statement(node, context)]


def compile_source(source: str, use_ir: bool = False, debug: bool = False) -> str:
    """Compile ``source`` into a complete assembly listing for ``main``.

    With ``use_ir`` the code goes through three-address code and register
    allocation, and the intermediate stages are written to stderr; otherwise
    a stack machine is generated straight from the syntax tree.
    Raises CompileError for malformed source.
    """
    tokens = tokenize(source)
    if debug:
        _debug("[DEBUG] tokens: ", tokens)

    parser = Parser(TokenStream(tokens, source))
    nodes = parser.program()
    if debug:
        _debug("[DEBUG] node: ", nodes)

    lines = [
        ".intel_syntax noprefix",
        ".globl main",
        "main:",
        "  push rbp",
        "  mov rbp, rsp",
        f"  sub rsp, {parser.stack_size()}",
    ]
    lines.extend(_ir_body(nodes) if use_ir else _stack_body(nodes))
    lines.extend(_EPILOGUE)
    return "\n".join(lines) + "\n"


def main(argv: Sequence[str] | None = None) -> int:
    """Compile the program given as the first argument and print the assembly."""
    arg_parser = argparse.ArgumentParser(prog="no2cc")
    arg_parser.add_argument("input")
    arg_parser.add_argument("-d", "--debug", action="store_true")
    arg_parser.add_argument("-i", "--ir", action="store_true")
    args = arg_parser.parse_args(argv)

    try:
        assembly = compile_source(args.input, use_ir=args.ir, debug=args.debug)
    except CompileError as exc:
        print(exc, file=sys.stderr)
        return 1
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    sys.stdout.write(assembly)
    return 0


if __name__ == "__main__":
    sys.exit(main())