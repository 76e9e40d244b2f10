"""Tokenizer for use statements."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    USE = "use"
    PUB = "pub"
    AS = "as"
    SELF = "self"
    CRATE = "crate"
    SUPER = "super"
    IN = "in"
    IDENTIFIER = "identifier"
    DOUBLE_COLON = "::"
    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    COMMA = ","
    SEMICOLON = ";"
    STAR = "*"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"


KEYWORDS = {
    "use": TokenType.USE,
    "pub": TokenType.PUB,
    "as": TokenType.AS,
    "self": TokenType.SELF,
    "crate": TokenType.CRATE,
    "super": TokenType.SUPER,
    "in": TokenType.IN,
}

PUNCTUATION = {
    "{": TokenType.OPEN_BRACE,
    "}": TokenType.CLOSE_BRACE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    line: int  # Relative to the start of the tokenized text
    start: int  # Column on that line
    end: int  # Exclusive


RAW_PREFIX = "r#"


def _is_ident_start(ch: str) -> bool:
    return ch.isidentifier()


def _is_ident_char(ch: str) -> bool:
    return ("_" + ch).isidentifier()


def _identifier_end(text: str, pos: int) -> int:
    end = pos + 1
    while end < len(text) and _is_ident_char(text[end]):
        end += 1
    return end


def tokenize(text: str) -> list[Token]:
    """Tokenize a use statement.

    Characters that can't start a token are skipped, so stray punctuation
    never makes tokenizing fail; the parser decides whether the remaining
    tokens form a statement.
    """
    tokens: list[Token] = []
    pos = 0
    line = 0
    line_start = 0  # Offset of the first character of the current line

    while pos < len(text):
        ch = text[pos]

        if ch == "\n":
            pos += 1
            line += 1
            line_start = pos
            continue

        if ch.isspace():
            pos += 1
            continue

        # Comments
        if text.startswith("//", pos):
            newline = text.find("\n", pos)
            pos = len(text) if newline == -1 else newline
            continue
        if text.startswith("/*", pos):
            close = text.find("*/", pos + 2)
            end = len(text) if close == -1 else close + 2
            skipped = text[pos:end]
            if "\n" in skipped:
                line += skipped.count("\n")
                line_start = pos + skipped.rfind("\n") + 1
            pos = end
            continue

        col = pos - line_start

        if text.startswith("::", pos):
            tokens.append(Token(TokenType.DOUBLE_COLON, "::", line, col, col + 2))
            pos += 2
            continue

        if ch in PUNCTUATION:
            tokens.append(Token(PUNCTUATION[ch], ch, line, col, col + 1))
            pos += 1
            continue

        # Raw identifier: `r#type` is never a keyword
        if (
            text.startswith(RAW_PREFIX, pos)
            and pos + 2 < len(text)
            and _is_ident_start(text[pos + 2])
        ):
            end = _identifier_end(text, pos + 2)
            word = text[pos:end]
            tokens.append(Token(TokenType.IDENTIFIER, word, line, col, col + len(word)))
            pos = end
            continue

        if _is_ident_start(ch):
            end = _identifier_end(text, pos)
            word = text[pos:end]
            token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
            tokens.append(Token(token_type, word, line, col, col + len(word)))
            pos = end
            continue

        # Unknown character
        pos += 1

    return tokens
