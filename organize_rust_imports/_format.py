"""Render use trees back to Rust source."""
from __future__ import annotations

from collections.abc import Iterable

from organize_rust_imports._data import GLOB
from organize_rust_imports._data import SELF
from organize_rust_imports._data import ImportGroup
from organize_rust_imports._data import ImportStatement
from organize_rust_imports._data import ImportTree
from organize_rust_imports._flatten import needs_braces
from organize_rust_imports._sort import sort_statements
from organize_rust_imports._sort import sort_tree

INDENT = "    "


def _format_name(name: str, alias: str | None) -> str:
    return f"{name} as {alias}" if alias else name


def format_tree(tree: ImportTree, indent: str = "") -> str:
    """Format a sorted use tree.

    Multiple children (or a lone `self`/`*`) go one per line inside braces,
    each followed by a comma; a single ordinary child is inlined.
    """
    if tree.is_glob:
        return GLOB
    if tree.is_self:
        return _format_name(SELF, tree.segment.alias)
    if not tree.children:
        return _format_name(tree.segment.name, tree.segment.alias)

    prefix = f"{tree.segment.name}::"
    if not needs_braces(tree):
        return prefix + format_tree(tree.children[0], indent)

    child_indent = indent + INDENT
    lines = ["{"]
    for child in tree.children:
        lines.append(f"{child_indent}{format_tree(child, child_indent)},")
    lines.append(f"{indent}}}")
    return prefix + "\n".join(lines)


def format_statement(statement: ImportStatement) -> str:
    lines = list(statement.attributes)

    text = f"{statement.visibility} " if statement.visibility else ""
    text += f"use {format_tree(sort_tree(statement.tree))};"
    lines.append(text)

    return "\n".join(lines)


def format_groups(groups: Iterable[ImportGroup]) -> str:
    """Join statements of a group by newlines and groups by a blank line."""
    sections = []
    for group in groups:
        statements = sort_statements(group.statements)
        if statements:
            sections.append("\n".join(format_statement(s) for s in statements))
    return "\n\n".join(sections)


def render(groups: Iterable[ImportGroup]) -> str:
    """Render organized groups, ending with exactly one newline.

    Returns an empty string when there is nothing to render.
    """
    text = format_groups(groups)
    return text + "\n" if text else ""
