"""Properties of the public API, exercised through the package namespace."""
from __future__ import annotations

import pytest

from organize_rust_imports import Category
from organize_rust_imports import DependencySet
from organize_rust_imports import ImportGroup
from organize_rust_imports import flatten
from organize_rust_imports import organize
from organize_rust_imports import parse_statement
from organize_rust_imports import render
from organize_rust_imports import scan_file

DEPS = DependencySet.of('serde', 'tokio')


@pytest.mark.parametrize(
    's',
    (
        pytest.param('use std::io;', id='simple'),
        pytest.param('use serde_json as json;', id='root alias'),
        pytest.param('use std::{io::{self, Read, Write as _}, fs::*};', id='nested'),
        pytest.param('pub(crate) use crate::a::{b, c::{d, e}};', id='visibility'),
        pytest.param('use a::{self as x, y};', id='aliased self'),
        pytest.param('use self::m::{*};', id='glob'),
    ),
)
def test_render_round_trip_keeps_imports(s):
    stmt = parse_statement(s)
    text = render([ImportGroup(Category.EXTERNAL, (stmt,))])

    reparsed = parse_statement(text.strip())
    assert set(flatten(reparsed.tree)) == set(flatten(stmt.tree))
    assert reparsed.visibility == stmt.visibility
    assert text.endswith(';\n')


@pytest.mark.parametrize(
    's',
    (
        pytest.param(
            'use std::io;\n'
            'use crate::m;\n'
            'use serde::X;\n'
            'use std::io::Read;\n',
            id='categories',
        ),
        pytest.param(
            '#[cfg(test)]\n'
            'use a::b;\n'
            '#[cfg(unix)]\n'
            'use a::c;\n'
            'pub use a::d;\n',
            id='attributes and visibility',
        ),
        pytest.param(
            'use a::T as X;\n'
            'use a::T as Y;\n',
            id='conflicting aliases',
        ),
    ),
)
def test_organize_render_is_idempotent(s):
    once = render(organize(scan_file(s).statements, DEPS))
    twice = render(organize(scan_file(once).statements, DEPS))
    assert twice == once
