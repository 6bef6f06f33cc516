"""A small compiler for a C-like language that emits x86-64 assembly."""

__version__ = "0.1.0"