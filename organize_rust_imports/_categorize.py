"""Sort statements into output categories."""
from __future__ import annotations

from collections.abc import Iterable

from organize_rust_imports._data import Category
from organize_rust_imports._data import DependencySet
from organize_rust_imports._data import ImportGroup
from organize_rust_imports._data import ImportStatement

STD_ROOTS = frozenset(("std", "core", "alloc"))
INTERNAL_ROOTS = frozenset(("crate", "super", "self"))

CATEGORY_LABELS = {
    Category.STD: "Standard Library",
    Category.EXTERNAL: "External Crates",
    Category.INTERNAL: "Internal Modules",
    Category.ATTRIBUTED: "Conditional Imports",
}


def category_label(category: Category) -> str:
    return CATEGORY_LABELS[category]


def categorize(
    statement: ImportStatement,
    dependencies: DependencySet | None = None,
) -> Category:
    if statement.attributes:
        return Category.ATTRIBUTED

    root = statement.root_name
    if root in STD_ROOTS:
        return Category.STD
    if root in INTERNAL_ROOTS:
        return Category.INTERNAL
    if dependencies is not None and root in dependencies:
        return Category.EXTERNAL
    # Unknown roots (proc-macro crates, undeclared deps) are external too
    return Category.EXTERNAL


def group_statements(
    statements: Iterable[ImportStatement],
    dependencies: DependencySet | None = None,
) -> list[ImportGroup]:
    """Partition statements into non-empty groups in display order.

    Attributed statements get one group per distinct attribute set, after
    all other categories, ordered by attribute set.
    """
    plain: dict[Category, list[ImportStatement]] = {}
    attributed: dict[tuple[str, ...], list[ImportStatement]] = {}

    for stmt in statements:
        category = categorize(stmt, dependencies)
        if category is Category.ATTRIBUTED:
            key = tuple(sorted(attr.strip() for attr in stmt.attributes))
            attributed.setdefault(key, []).append(stmt)
        else:
            plain.setdefault(category, []).append(stmt)

    groups = [
        ImportGroup(category, tuple(plain[category]))
        for category in Category
        if category in plain
    ]
    for key in sorted(attributed):
        groups.append(ImportGroup(Category.ATTRIBUTED, tuple(attributed[key]), key))

    return groups
