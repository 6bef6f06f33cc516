# no2cc

A small compiler for a C-like expression language. It takes a program
as a command-line argument and writes x86-64 assembly (Intel syntax) to
standard output.

## Language

- Integer literals that fit in a signed 32-bit integer.
- Local variables: `a`, `foo_1`, `A2b_C3`, ... Each one gets its own
  8-byte stack slot.
- Arithmetic: `+ - * /`, unary `+` and `-`, parentheses.
- Comparisons: `== != < <= > >=`. Each one yields 0 or 1.
- Assignment: `a = 3;`
- Statements: expression statements, `return expr;`,
  `if (cond) stmt` with an optional `else stmt`, and blocks `{ ... }`.
- Calls to functions that take no arguments: `foo();`

All statements go into one function, `main`.

## Installation

```
pip install .
```

## Usage

```
no2cc "a = 3; b = 4; return a * b;"
```

This prints the assembly listing for `main`. Assemble and link it with
any toolchain that accepts Intel syntax.

Options:

- `-d`, `--debug`: print the tokens and the syntax tree to standard error.
- `-i`, `--ir`: compile through a three-address intermediate
  representation with linear-scan register allocation, instead of
  generating stack-machine code straight from the syntax tree. In this
  mode the IR, the live intervals and the register assignment are always
  written to standard error.

If the program cannot be tokenized or parsed, the command prints the
input with a caret under the position of the error and exits with
status 1.

## Library use

```python
from no2cc.cli import compile_source

asm = compile_source("return 1 + 2;", use_ir=False, debug=False)
print(asm)
```

`compile_source` returns the whole listing as one string. It raises
`no2cc.errors.CompileError` for malformed source. `str()` of that
error gives the same caret display that the command prints.

You can also call each stage on its own:

- `no2cc.lexer.tokenize(source)` returns a list of `Token`s.
  `Tokenizer` and `TokenStream` are the classes behind it.
- `no2cc.parser.parse(source)` returns the parsed statements as `Node`s.
  `Parser(tokens).program()` does the same from a `TokenStream`, and
  `Parser.stack_size()` gives the stack space the locals need, rounded
  up to 16 bytes.
- `no2cc.codegen.generate(node, context)` and
  `no2cc.codegen.generate_statement(node, context)` return stack-machine
  assembly lines. They take a `CodegenContext`.
- `no2cc.ir.gen_ir.node_to_ir(node, context)` emits three-address code
  (see `no2cc.ir.types`) into a `GenIrContext`.
- `no2cc.reg_alloc.interval_analysis.scan_interval(codes)` computes live
  intervals.
- `no2cc.reg_alloc.register_allocation.linear_reg_alloc(intervals, reg_count)`
  maps each virtual register to a register index.
- `no2cc.gen_x64.Generator(regs, codes).gen_all(vreg_to_reg)` returns
  assembly lines from allocated IR.

## Limitations

- Input is only a string given on the command line. The compiler does
  not read source files, and it does not assemble or link its output.
- There are no function definitions, parameters or call arguments. The
  whole program is the body of `main`.
- The `--ir` path cannot handle blocks or function calls, and it cannot
  spill registers. If more than seven values are live at once, or the
  program uses one of those constructs, compilation fails with an error
  and exit status 1.

## Tests

```
pip install ".[test]"
pytest
```