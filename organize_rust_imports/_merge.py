"""Merge use statements that share a root path."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from organize_rust_imports._data import DISCARD_ALIAS
from organize_rust_imports._data import FlatImport
from organize_rust_imports._data import ImportStatement
from organize_rust_imports._data import Position
from organize_rust_imports._data import Range
from organize_rust_imports._flatten import build_tree
from organize_rust_imports._flatten import flatten
from organize_rust_imports._sort import sort_tree

logger = logging.getLogger(__name__)

GroupKey = tuple[str, str, tuple[str, ...]]


class MergeAmbiguity(ValueError):
    """Two different explicit aliases target the same path."""

    def __init__(self, key: str, first: str, second: str) -> None:
        super().__init__(f"{key} is imported both as {first!r} and as {second!r}")
        self.key = key
        self.aliases = (first, second)


def alias_priority(alias: str | None) -> int:
    """An explicit alias beats no alias, which beats the discard alias `_`."""
    if alias is None:
        return 1
    if alias == DISCARD_ALIAS:
        return 0
    return 2


def resolve_alias(existing: FlatImport, new: FlatImport) -> FlatImport:
    """Pick which of two imports of the same path to keep."""
    if existing.alias == new.alias:
        return existing
    existing_priority = alias_priority(existing.alias)
    new_priority = alias_priority(new.alias)
    if existing_priority == new_priority == 2:
        raise MergeAmbiguity(existing.key, existing.alias or "", new.alias or "")
    return new if new_priority > existing_priority else existing


def deduplicate(flat_imports: Iterable[FlatImport]) -> list[FlatImport]:
    """Collapse imports of the same path, resolving aliases by priority.

    Raises MergeAmbiguity when two explicit aliases collide.
    """
    merged: dict[str, FlatImport] = {}
    for flat in flat_imports:
        existing = merged.get(flat.key)
        merged[flat.key] = flat if existing is None else resolve_alias(existing, flat)
    return list(merged.values())


def merged_range(statements: Iterable[ImportStatement]) -> Range | None:
    """Union of the statements' ranges (min start, max end)."""
    ranges = [stmt.range for stmt in statements if stmt.range is not None]
    if not ranges:
        return None
    start: Position = min(r.start for r in ranges)
    end: Position = max(r.end for r in ranges)
    return Range(start, end)


def normalized_attributes(statement: ImportStatement) -> tuple[str, ...]:
    return tuple(sorted(attr.strip() for attr in statement.attributes))


def group_key(statement: ImportStatement) -> GroupKey:
    return (
        statement.root_name,
        statement.visibility or "",
        normalized_attributes(statement),
    )


def _merge_group(group: list[ImportStatement]) -> ImportStatement:
    flat_imports = deduplicate(
        flat for stmt in group for flat in flatten(stmt.tree)
    )
    tree = build_tree(flat_imports)
    # flatten never yields an empty list for a parsed tree
    assert tree is not None

    first = group[0]
    return ImportStatement(
        tree=sort_tree(tree),
        visibility=first.visibility,
        attributes=first.attributes,
        range=merged_range(group),
        block_id=first.block_id,
    )


def merge_statements(
    statements: Iterable[ImportStatement],
    log: logging.Logger | None = None,
) -> list[ImportStatement]:
    """Merge statements with the same root, visibility and attributes.

    `use a::b;` and `use a::{b::c, d};` become `use a::{b::{self, c}, d};`.
    Groups come out in order of first appearance. A group whose statements
    give one path two different explicit aliases is not merged; its
    statements are returned individually.

    `log` receives merge diagnostics; it defaults to this module's logger.
    """
    if log is None:
        log = logger

    groups: dict[GroupKey, list[ImportStatement]] = {}
    for stmt in statements:
        groups.setdefault(group_key(stmt), []).append(stmt)

    result: list[ImportStatement] = []
    for key, group in groups.items():
        try:
            result.append(_merge_group(group))
        except MergeAmbiguity as e:
            log.warning("Not merging imports of %r: %s", key[0], e)
            result.extend(_merge_each(group, log))
        else:
            if len(group) > 1:
                log.debug("Merged %d statements rooted at %r", len(group), key[0])

    return result


def _merge_each(
    group: list[ImportStatement],
    log: logging.Logger,
) -> list[ImportStatement]:
    result: list[ImportStatement] = []
    for stmt in group:
        try:
            result.append(_merge_group([stmt]))
        except MergeAmbiguity as e:
            log.warning("Leaving statement as written: %s", e)
            result.append(stmt)
    return result
