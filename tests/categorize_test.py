"""Tests for sorting statements into categories (_categorize.py)."""
from __future__ import annotations

import pytest

from organize_rust_imports._categorize import categorize
from organize_rust_imports._categorize import category_label
from organize_rust_imports._categorize import group_statements
from organize_rust_imports._data import Category
from organize_rust_imports._data import DependencySet
from organize_rust_imports._parser import parse_statement

DEPS = DependencySet.of('serde', 'tokio', 'serde-json')


@pytest.mark.parametrize(
    ('s', 'expected'),
    (
        pytest.param('use std::io;', Category.STD, id='std'),
        pytest.param('use core::fmt;', Category.STD, id='core'),
        pytest.param('use alloc::vec::Vec;', Category.STD, id='alloc'),
        pytest.param('use serde::Deserialize;', Category.EXTERNAL, id='dependency'),
        pytest.param('use serde_json::Value;', Category.EXTERNAL, id='hyphenated'),
        pytest.param('use rand::Rng;', Category.EXTERNAL, id='unknown crate'),
        pytest.param('use crate::utils;', Category.INTERNAL, id='crate'),
        pytest.param('use super::parent;', Category.INTERNAL, id='super'),
        pytest.param('use self::child;', Category.INTERNAL, id='self'),
    ),
)
def test_categorize(s, expected):
    assert categorize(parse_statement(s), DEPS) is expected


def test_categorize_without_dependencies():
    assert categorize(parse_statement('use serde::X;')) is Category.EXTERNAL


def test_attributes_win_over_root():
    stmt = parse_statement('use std::io;', attributes=['#[cfg(test)]'])
    assert categorize(stmt, DEPS) is Category.ATTRIBUTED


def test_dependency_set_normalizes_names():
    deps = DependencySet.of('serde-json')
    assert 'serde_json' in deps
    assert 'serde-json' in deps
    assert 'serde' not in deps


def test_group_statements():
    statements = [
        parse_statement('use crate::m;'),
        parse_statement('use serde::X;'),
        parse_statement('use std::io;'),
        parse_statement('use std::fs;'),
    ]
    groups = group_statements(statements, DEPS)
    assert [g.category for g in groups] == [
        Category.STD, Category.EXTERNAL, Category.INTERNAL,
    ]
    assert [s.tree.children[0].name for s in groups[0].statements] == ['io', 'fs']


def test_empty_groups_are_omitted():
    groups = group_statements([parse_statement('use crate::m;')], DEPS)
    assert [g.category for g in groups] == [Category.INTERNAL]


def test_group_statements_empty():
    assert group_statements([]) == []


def test_attributed_groups_come_last_and_per_attribute_set():
    statements = [
        parse_statement('use a::b;', attributes=['#[cfg(unix)]']),
        parse_statement('use std::io;'),
        parse_statement('use c::d;', attributes=['#[cfg(test)]']),
        parse_statement('use e::f;', attributes=['#[cfg(unix)]']),
    ]
    groups = group_statements(statements, DEPS)
    assert [g.category for g in groups] == [
        Category.STD, Category.ATTRIBUTED, Category.ATTRIBUTED,
    ]
    assert groups[1].attributes == ('#[cfg(test)]',)
    assert groups[2].attributes == ('#[cfg(unix)]',)
    assert [s.root_name for s in groups[2].statements] == ['a', 'e']


def test_category_label():
    assert category_label(Category.STD) == 'Standard Library'
    assert category_label(Category.ATTRIBUTED) == 'Conditional Imports'
