from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from organize_rust_imports._data import ImportStatement
from organize_rust_imports._data import ImportTree


def child_sort_key(tree: ImportTree) -> tuple[int, str]:
    """`self` first, then case-sensitive alphabetical, globs last."""
    if tree.is_self:
        return (0, "")
    if tree.is_glob:
        return (2, "")
    return (1, tree.segment.name)


def sort_tree(tree: ImportTree) -> ImportTree:
    """Return a copy of `tree` with children sorted at every level."""
    if not tree.children:
        return tree
    children = sorted((sort_tree(child) for child in tree.children), key=child_sort_key)
    return replace(tree, children=tuple(children))


def canonical_path(tree: ImportTree) -> str:
    """Path read off the sorted tree, following the first child at each level."""
    parts = [tree.segment.name]
    node = sort_tree(tree)
    while node.children:
        node = node.children[0]
        parts.append(node.segment.name)
    return "::".join(parts)


def statement_sort_key(statement: ImportStatement) -> tuple[str, str]:
    return canonical_path(statement.tree), statement.visibility or ""


def sort_statements(statements: Iterable[ImportStatement]) -> list[ImportStatement]:
    """Sort statements by canonical path, sorting each tree as well."""
    sorted_trees = [replace(stmt, tree=sort_tree(stmt.tree)) for stmt in statements]
    return sorted(sorted_trees, key=statement_sort_key)
