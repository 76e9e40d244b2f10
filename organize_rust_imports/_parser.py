"""Recursive-descent parser for use statements."""
from __future__ import annotations

from organize_rust_imports._data import GLOB
from organize_rust_imports._data import SELF
from organize_rust_imports._data import ImportStatement
from organize_rust_imports._data import ImportTree
from organize_rust_imports._data import Position
from organize_rust_imports._data import Range
from organize_rust_imports._data import Segment
from organize_rust_imports._lexer import Token
from organize_rust_imports._lexer import TokenType
from organize_rust_imports._lexer import tokenize

# Tokens that may name a path segment
SEGMENT_TOKENS = frozenset((
    TokenType.IDENTIFIER,
    TokenType.SELF,
    TokenType.CRATE,
    TokenType.SUPER,
))


class ParseError(ValueError):
    """Raised when a use statement does not match the grammar."""


class UseTreeParser:
    """Parse a token stream into an ImportTree.

    All spans are absolute: token positions are shifted by `base`, the
    document position of the first character of the tokenized text.
    """

    def __init__(self, tokens: list[Token], base: Position = Position(0, 0)) -> None:
        self.tokens = tokens
        self.pos = 0
        self.base = base

    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def peek(self, offset: int = 1) -> Token | None:
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def advance(self) -> Token:
        token = self.current()
        if token is None:
            raise ParseError("Unexpected end of input")
        self.pos += 1
        return token

    def expect(self, token_type: TokenType) -> Token:
        token = self.current()
        if token is None or token.type is not token_type:
            got = token.value if token else "end of input"
            raise ParseError(f"Expected {token_type.value!r} but got {got!r}")
        self.pos += 1
        return token

    def match(self, token_type: TokenType) -> bool:
        token = self.current()
        return token is not None and token.type is token_type

    def span(self, token: Token) -> Range:
        if token.line == 0:
            line = self.base.line
            start = self.base.column + token.start
            end = self.base.column + token.end
        else:
            line = self.base.line + token.line
            start = token.start
            end = token.end
        return Range(Position(line, start), Position(line, end))

    def parse_visibility(self) -> str | None:
        """Parse `pub`, `pub(crate)`, `pub(super)`, `pub(self)`, `pub(in path)`."""
        if not self.match(TokenType.PUB):
            return None
        self.advance()

        if not self.match(TokenType.OPEN_PAREN):
            return "pub"
        self.advance()

        if self.match(TokenType.IN):
            self.advance()
            parts: list[str] = []
            while not self.match(TokenType.CLOSE_PAREN):
                parts.append(self.advance().value)
            if not parts:
                raise ParseError("Expected a path after 'pub(in'")
            inner = "in " + "".join(parts)
        else:
            inner = self.advance().value

        self.expect(TokenType.CLOSE_PAREN)
        return f"pub({inner})"

    def parse_alias(self) -> str | None:
        if not self.match(TokenType.AS):
            return None
        self.advance()
        return self.expect(TokenType.IDENTIFIER).value

    def parse_segment(self) -> Segment:
        token = self.advance()
        if token.type not in SEGMENT_TOKENS:
            raise ParseError(f"Expected a path segment but got {token.value!r}")
        return Segment(token.value, self.parse_alias(), self.span(token))

    def parse_use_tree(self, nested: bool = True) -> ImportTree:
        token = self.current()
        if token is None:
            raise ParseError("Unexpected end of input")

        if token.type is TokenType.STAR:
            if not nested:
                raise ParseError("Glob import needs a path")
            self.advance()
            return ImportTree(Segment(GLOB, span=self.span(token)), is_glob=True)

        # `self` is a leaf unless it starts a path (`use self::a;`)
        if token.type is TokenType.SELF and nested:
            following = self.peek()
            if following is None or following.type is not TokenType.DOUBLE_COLON:
                self.advance()
                return ImportTree(Segment(SELF, self.parse_alias(), self.span(token)))

        segment = self.parse_segment()
        if not self.match(TokenType.DOUBLE_COLON):
            return ImportTree(segment)
        self.advance()

        if segment.alias is not None:
            raise ParseError(f"Alias {segment.alias!r} must come last in a path")

        if self.match(TokenType.OPEN_BRACE):
            self.advance()
            children = self.parse_use_tree_list()
            self.expect(TokenType.CLOSE_BRACE)
        elif self.match(TokenType.STAR):
            star = self.advance()
            children = [ImportTree(Segment(GLOB, span=self.span(star)), is_glob=True)]
        else:
            children = [self.parse_use_tree()]

        return ImportTree(segment, tuple(children))

    def parse_use_tree_list(self) -> list[ImportTree]:
        trees: list[ImportTree] = []

        while not self.match(TokenType.CLOSE_BRACE):
            trees.append(self.parse_use_tree())
            if self.match(TokenType.COMMA):
                self.advance()
            else:
                break

        if not trees:
            raise ParseError("Empty braces")
        return trees

    def parse(self) -> tuple[str | None, ImportTree]:
        visibility = self.parse_visibility()
        self.expect(TokenType.USE)
        tree = self.parse_use_tree(nested=False)

        if self.match(TokenType.SEMICOLON):
            self.advance()
        token = self.current()
        if token is not None:
            raise ParseError(f"Unexpected {token.value!r} after use tree")

        return visibility, tree


def parse_statement(
    text: str,
    attributes: tuple[str, ...] | list[str] = (),
    range: Range | None = None,
    block_id: int | None = None,
) -> ImportStatement:
    """Parse a single use statement from its source text.

    `range`, when given, locates `text` in the document; segment spans are
    reported relative to its start.

    Raises ParseError on malformed input.
    """
    base = range.start if range is not None else Position(0, 0)
    parser = UseTreeParser(tokenize(text), base)
    visibility, tree = parser.parse()

    return ImportStatement(
        tree=tree,
        visibility=visibility,
        attributes=tuple(attributes),
        range=range,
        block_id=block_id,
    )
