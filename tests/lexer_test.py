"""Tests for the use statement tokenizer (_lexer.py)."""
from __future__ import annotations

import pytest

from organize_rust_imports._lexer import TokenType
from organize_rust_imports._lexer import tokenize


def _values(text):
    return [token.value for token in tokenize(text)]


# =============================================================================
# Token kinds
# =============================================================================


def test_simple_statement_token_types():
    tokens = tokenize('use std::io;')
    assert [t.type for t in tokens] == [
        TokenType.USE,
        TokenType.IDENTIFIER,
        TokenType.DOUBLE_COLON,
        TokenType.IDENTIFIER,
        TokenType.SEMICOLON,
    ]


def test_keywords_take_precedence_over_identifiers():
    tokens = tokenize('pub(in crate) use self::super_mod as _;')
    assert [t.type for t in tokens] == [
        TokenType.PUB,
        TokenType.OPEN_PAREN,
        TokenType.IN,
        TokenType.CRATE,
        TokenType.CLOSE_PAREN,
        TokenType.USE,
        TokenType.SELF,
        TokenType.DOUBLE_COLON,
        TokenType.IDENTIFIER,
        TokenType.AS,
        TokenType.IDENTIFIER,
        TokenType.SEMICOLON,
    ]


def test_raw_identifier_is_one_token():
    tokens = tokenize('use crate::r#type;')
    assert [t.value for t in tokens] == ['use', 'crate', '::', 'r#type', ';']
    assert tokens[3].type is TokenType.IDENTIFIER
    assert (tokens[3].start, tokens[3].end) == (11, 17)


def test_unicode_identifier():
    tokens = tokenize('use crate::café;')
    assert tokens[3].value == 'café'
    assert tokens[3].type is TokenType.IDENTIFIER


def test_braces_commas_and_star():
    tokens = tokenize('{a, *}')
    assert [t.type for t in tokens] == [
        TokenType.OPEN_BRACE,
        TokenType.IDENTIFIER,
        TokenType.COMMA,
        TokenType.STAR,
        TokenType.CLOSE_BRACE,
    ]


@pytest.mark.parametrize(
    ('s', 'expected'),
    (
        pytest.param('use a$::b;', ['use', 'a', '::', 'b', ';'], id='dollar'),
        pytest.param('use a::b;?', ['use', 'a', '::', 'b', ';'], id='question'),
        pytest.param('use a:b;', ['use', 'a', 'b', ';'], id='single colon'),
        pytest.param('use 9a;', ['use', 'a', ';'], id='leading digit'),
    ),
)
def test_unknown_characters_are_skipped(s, expected):
    assert _values(s) == expected


@pytest.mark.parametrize(
    ('s', 'expected'),
    (
        pytest.param(
            'use a::{b, // trailing\n c};',
            ['use', 'a', '::', '{', 'b', ',', 'c', '}', ';'],
            id='line comment',
        ),
        pytest.param(
            'use a::{/* inline */ b};',
            ['use', 'a', '::', '{', 'b', '}', ';'],
            id='block comment',
        ),
    ),
)
def test_comments_are_skipped(s, expected):
    assert _values(s) == expected


# =============================================================================
# Positions
# =============================================================================


def test_columns_on_first_line():
    tokens = tokenize('use std::io;')
    assert [(t.line, t.start, t.end) for t in tokens] == [
        (0, 0, 3),
        (0, 4, 7),
        (0, 7, 9),
        (0, 9, 11),
        (0, 11, 12),
    ]


def test_newline_resets_column():
    tokens = tokenize('use std::{\n    io,\n};')
    io = tokens[4]
    assert io.value == 'io'
    assert (io.line, io.start, io.end) == (1, 4, 6)
    close = tokens[6]
    assert close.type is TokenType.CLOSE_BRACE
    assert (close.line, close.start) == (2, 0)


def test_block_comment_spanning_lines_counts_lines():
    tokens = tokenize('use a::{/* x\n y */ b};')
    b = tokens[4]
    assert b.value == 'b'
    assert (b.line, b.start) == (1, 6)


def test_empty_input():
    assert tokenize('') == []
