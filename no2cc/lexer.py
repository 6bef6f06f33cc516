"""Tokenizer and a cursor over the resulting tokens."""

from __future__ import annotations

from collections.abc import Iterator

from .errors import CompileError
from .types import Token, TokenKind

_KEYWORDS = (
    ("return", TokenKind.RETURN),
    ("if", TokenKind.IF),
    ("else", TokenKind.ELSE),
)
_PUNCT_2 = ("<=", ">=", "==", "!=")
_PUNCT_1 = ("+", "-", "*", "/", "(", ")", ";", "<", ">", "=", "{", "}")
_I32_MAX = 2**31 - 1
# str.isspace treats the information separators as whitespace; they are not.
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def _is_whitespace(c: str) -> bool:
    return c.isspace() and c not in _NOT_WHITESPACE


def _is_ident_char(c: str) -> bool:
    return (c.isascii() and c.isalnum()) or c == "_"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


class Tokenizer:
    """Splits source text into tokens, ending with an EOF token."""

    def __init__(self, source: str) -> None:
        self.source = source
        self._pos = 0

    def tokenize(self) -> list[Token]:
        return list(self._scan())

    def _ident_char_at(self, idx: int) -> bool:
        return idx < len(self.source) and _is_ident_char(self.source[idx])

    def _scan(self) -> Iterator[Token]:
        src = self.source
        self._pos = 0
        while self._pos < len(src):
            c = src[self._pos]
            if _is_whitespace(c):
                self._pos += 1
                continue
            token = (
                self._keyword()
                or self._punct(_PUNCT_2)
                or self._punct(_PUNCT_1)
                or self._number()
                or self._ident()
            )
            if token is None:
                raise CompileError(src, self._pos, f"cannot tokenize: {c}")
            yield token
        yield Token(TokenKind.EOF, "<EOF>", 1, self._pos)

    def _keyword(self) -> Token | None:
        for word, kind in _KEYWORDS:
            end = self._pos + len(word)
            if self.source.startswith(word, self._pos) and not self._ident_char_at(end):
                token = Token(kind, word, len(word), self._pos)
                self._pos = end
                return token
        return None

    def _punct(self, patterns: tuple[str, ...]) -> Token | None:
        for pat in patterns:
            if self.source.startswith(pat, self._pos):
                token = Token(TokenKind.RESERVED, pat, len(pat), self._pos)
                self._pos += len(pat)
                return token
        return None

    def _number(self) -> Token | None:
        start = self._pos
        end = start
        while end < len(self.source) and _is_digit(self.source[end]):
            end += 1
        if end == start:
            return None
        text = self.source[start:end]
        value = int(text)
        if value > _I32_MAX:
            raise CompileError(self.source, start, f"number out of range: {text}")
        self._pos = end
        return Token(TokenKind.NUM, text, len(text), start, value)

    def _ident(self) -> Token | None:
        start = self._pos
        if not "A" <= self.source[start] <= "z":
            return None
        end = start + 1
        while self._ident_char_at(end):
            end += 1
        text = self.source[start:end]
        self._pos = end
        return Token(TokenKind.IDENT, text, len(text), start)


def tokenize(source: str) -> list[Token]:
    """Tokenize ``source`` in one call."""
    return Tokenizer(source).tokenize()


class TokenStream:
    """A cursor over a token list, used by the parser."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self.tokens = list(tokens)
        self.idx = 0
        self.source = source

    def current(self) -> Token:
        return self.tokens[self.idx]

    def at_eof(self) -> bool:
        return self.current().kind is TokenKind.EOF

    def _is_reserved(self, op: str) -> bool:
        tok = self.current()
        return tok.kind is TokenKind.RESERVED and tok.length == len(op) and tok.text == op

    def consume(self, op: str) -> bool:
        """Advance past the reserved symbol ``op`` if it is next."""
        if not self._is_reserved(op):
            return False
        self.idx += 1
        return True

    def consume_keyword(self, kind: TokenKind) -> bool:
        if self.current().kind is not kind:
            return False
        self.idx += 1
        return True

    def consume_ident(self) -> Token | None:
        tok = self.current()
        if tok.kind is not TokenKind.IDENT:
            return None
        self.idx += 1
        return tok

    def expect(self, op: str) -> None:
        """Advance past ``op`` or raise a CompileError at the current token."""
        if self._is_reserved(op):
            self.idx += 1
            return
        tok = self.current()
        if op == ";":
            message = "';' expected"
        else:
            message = f"expected '{op}' but got '{tok.text}'"
        raise CompileError(self.source, tok.pos, message)

    def expect_number(self) -> int:
        tok = self.current()
        if tok.kind is not TokenKind.NUM:
            raise CompileError(self.source, tok.pos, "a number is expected here")
        if tok.val is None:
            raise CompileError(self.source, tok.pos, "token holds no number")
        self.idx += 1
        return tok.val