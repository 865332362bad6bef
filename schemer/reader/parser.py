"""
  Scheme reader: lexer and recursive-descent parser.

Tokens are produced lazily and parsed with one token of lookahead. The parser
emits plain Python values rather than cons cells:

    - symbols -> Symbol
    - integers (optional sign, decimal digits) -> int
    - #t / #f -> bool
    - strings -> str; the escapes are backslash followed by one of \\ " n t r,
      and a raw newline inside the quotes is kept as is
    - lists -> list
    - dotted lists -> (list_part, tail), via make_dotted
    - 'x -> [Symbol("quote"), x]

Quasiquote syntax (`x ,x ,@x) is rejected: the evaluator has no quasiquote form.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, NamedTuple, Optional

from schemer import SExpression
from schemer.errors import SchemerSyntaxError
from schemer.types.symbol import Symbol
from schemer.types.values import make_dotted


class Token(NamedTuple):
    kind: str
    text: str
    pos: int


# Order matters: the first alternative that matches at a position wins.
_TOKEN_SPEC = (
    ("comment", r";[^\n]*"),
    ("block_comment", r"#\|"),
    ("quote", r"'"),
    ("quasiquote", r"`|,@?"),
    ("lparen", r"\("),
    ("rparen", r"\)"),
    ("string", r'"(?:\\.|[^\\"])*"'),
    ("boolean", r"#[tf](?![^\s()'\";])"),
    # everything else up to a delimiter; integers are told apart at parse time
    ("symbol", r"[^\s()'\",;`]+"),
)

TOKEN_RE = re.compile("|".join(f"(?P<{kind}>{rx})" for kind, rx in _TOKEN_SPEC), re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s*")
_BLOCK_DELIM_RE = re.compile(r"#\||\|#")

INTEGER_RE = re.compile(r"[+-]?\d+")

QUOTE = Symbol("quote")

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t", "r": "\r"}


def _skip_block_comment(source: str, pos: int) -> int:
    """Return the position just past the `|#` closing a block comment opened before `pos`. Nests."""
    depth = 1
    while depth:
        m = _BLOCK_DELIM_RE.search(source, pos)
        if m is None:
            raise SchemerSyntaxError("unterminated block comment")
        depth += 1 if m.group() == "#|" else -1
        pos = m.end()
    return pos


def lex(source: str) -> Iterator[Token]:
    """Yield the tokens of `source`, dropping whitespace and comments."""
    pos = 0
    n = len(source)
    while True:
        pos = _WHITESPACE_RE.match(source, pos).end()
        if pos >= n:
            return
        m = TOKEN_RE.match(source, pos)
        if m is None:
            raise SchemerSyntaxError(f"unexpected character at {pos}: {source[pos]!r}")
        kind = m.lastgroup
        if kind == "comment":
            pos = m.end()
        elif kind == "block_comment":
            pos = _skip_block_comment(source, m.end())
        else:
            yield Token(kind, m.group(), pos)
            pos = m.end()


def _atom(text: str) -> SExpression:
    if INTEGER_RE.fullmatch(text):
        return int(text)
    return Symbol(text)


def _string(tok: Token) -> str:
    def unescape(m: re.Match) -> str:
        ch = m.group(1)
        if ch not in _ESCAPES:
            raise SchemerSyntaxError(f"unknown escape \\{ch} in string at {tok.pos}")
        return _ESCAPES[ch]

    return _ESCAPE_RE.sub(unescape, tok.text[1:-1])


class TokenStream:
    """Recursive-descent parser over a token iterator, one token of lookahead."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self._lookahead: Optional[Token] = next(self._tokens, None)

    def peek(self) -> Optional[Token]:
        return self._lookahead

    def advance(self) -> Token:
        tok = self._lookahead
        if tok is None:
            raise SchemerSyntaxError("unexpected end of input")
        self._lookahead = next(self._tokens, None)
        return tok

    def at_end(self) -> bool:
        return self._lookahead is None

    def parse_expr(self) -> SExpression:
        tok = self.advance()
        if tok.kind == "symbol":
            return _atom(tok.text)
        if tok.kind == "boolean":
            return tok.text == "#t"
        if tok.kind == "string":
            return _string(tok)
        if tok.kind == "quote":
            if self.at_end():
                raise SchemerSyntaxError(f"expected a form after ' at {tok.pos}")
            return [QUOTE, self.parse_expr()]
        if tok.kind == "quasiquote":
            raise SchemerSyntaxError(
                f"quasiquote syntax {tok.text!r} at {tok.pos} is not supported; use quote"
            )
        if tok.kind == "lparen":
            return self._parse_list(tok)
        raise SchemerSyntaxError(f"unexpected ')' at {tok.pos}")

    def _parse_list(self, opener: Token) -> SExpression:
        items: list[SExpression] = []
        while True:
            tok = self.peek()
            if tok is None:
                raise SchemerSyntaxError(f"unmatched '(' at {opener.pos}")
            if tok.kind == "rparen":
                self.advance()
                return items
            if tok.kind == "symbol" and tok.text == ".":
                self.advance()
                return self._parse_dotted_tail(items, tok)
            items.append(self.parse_expr())

    def _parse_dotted_tail(self, items: list[SExpression], dot: Token) -> SExpression:
        if not items:
            raise SchemerSyntaxError(f"expected a form before '.' at {dot.pos}")
        tok = self.peek()
        if tok is None or tok.kind == "rparen":
            raise SchemerSyntaxError(f"expected a form after '.' at {dot.pos}")
        tail = self.parse_expr()
        tok = self.peek()
        if tok is None or tok.kind != "rparen":
            raise SchemerSyntaxError(f"expected ')' after dotted tail at {dot.pos}")
        self.advance()
        return make_dotted(items, tail)

    def parse_all(self) -> Iterator[SExpression]:
        while not self.at_end():
            yield self.parse_expr()


def parse(source: str) -> SExpression:
    """Read exactly one form from `source`."""
    stream = TokenStream(lex(source))
    expr = stream.parse_expr()
    if not stream.at_end():
        raise SchemerSyntaxError(f"unexpected input after form: {stream.peek().text!r}")
    return expr


def parse_all(source: str) -> list[SExpression]:
    """Read every top-level form in `source`."""
    return list(TokenStream(lex(source)).parse_all())
