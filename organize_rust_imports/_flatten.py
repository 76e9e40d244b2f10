"""Conversion between use trees and flat imports."""
from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field

from organize_rust_imports._data import GLOB
from organize_rust_imports._data import SELF
from organize_rust_imports._data import FlatImport
from organize_rust_imports._data import ImportTree
from organize_rust_imports._data import Range
from organize_rust_imports._data import Segment


def flatten(tree: ImportTree) -> list[FlatImport]:
    """Flatten a use tree into one FlatImport per import target.

    `use std::{io::{self, Read}, fs::*};` flattens to `std::io`,
    `std::io::Read` and the glob `std::fs::*`.
    """
    # The root is always a path segment, even when named `self`
    root = tree.segment
    if tree.is_leaf:
        return [FlatImport((root.name,), root.alias, spans=(root.span,))]

    flat: list[FlatImport] = []
    for child in tree.children or ():
        flat.extend(_flatten(child, (root.name,), (root.span,)))
    return flat


def _flatten(
    tree: ImportTree,
    prefix: tuple[str, ...],
    spans: tuple[Range | None, ...],
) -> Iterator[FlatImport]:
    segment = tree.segment

    if tree.is_glob:
        yield FlatImport(prefix, is_glob=True, spans=spans + (segment.span,))
    elif tree.is_self:
        yield FlatImport(prefix, segment.alias, spans=spans + (segment.span,))
    elif tree.is_leaf:
        yield FlatImport(
            prefix + (segment.name,), segment.alias, spans=spans + (segment.span,),
        )
    else:
        for child in tree.children or ():
            yield from _flatten(
                child, prefix + (segment.name,), spans + (segment.span,),
            )


def path_spans(flat: FlatImport) -> tuple[Range | None, ...]:
    """The spans of the path segments alone (without a `self`/`*` marker)."""
    return flat.spans[:len(flat.path)]


@dataclass
class _TrieNode:
    name: str
    span: Range | None = None
    is_target: bool = False  # The path ending here is imported itself
    alias: str | None = None  # Alias of the target, if any
    has_glob: bool = False
    children: dict[str, _TrieNode] = field(default_factory=dict)


def _insert(root: _TrieNode, flat: FlatImport) -> None:
    node = root
    spans = path_spans(flat)
    for index, name in enumerate(flat.path[1:], start=1):
        child = node.children.get(name)
        if child is None:
            span = spans[index] if index < len(spans) else None
            child = node.children[name] = _TrieNode(name, span)
        node = child

    if flat.is_glob:
        node.has_glob = True
    else:
        node.is_target = True
        node.alias = flat.alias


def _child_sort_key(node: _TrieNode) -> str:
    return node.name


def _to_tree(node: _TrieNode) -> ImportTree:
    children: list[ImportTree] = []
    alias = node.alias

    # Imported itself and used as a prefix: `a::{self, b}`
    if node.is_target and (node.children or node.has_glob):
        children.append(ImportTree(Segment(SELF, alias)))
        alias = None

    for child in sorted(node.children.values(), key=_child_sort_key):
        children.append(_to_tree(child))

    if node.has_glob:
        children.append(ImportTree(Segment(GLOB), is_glob=True))

    segment = Segment(node.name, alias, node.span)
    if not children:
        return ImportTree(segment)
    return ImportTree(segment, tuple(children))


def build_tree(flat_imports: Iterable[FlatImport]) -> ImportTree | None:
    """Rebuild a use tree from flat imports sharing one root segment.

    Returns None for an empty input. Later duplicates replace earlier ones,
    so callers wanting alias resolution deduplicate first.
    """
    flat_imports = list(flat_imports)
    if not flat_imports:
        return None

    if any(not flat.path for flat in flat_imports):
        raise ValueError("Flat import has an empty path")

    first = flat_imports[0]
    root = _TrieNode(first.path[0], first.spans[0] if first.spans else None)

    for flat in flat_imports:
        if flat.path[0] != root.name:
            raise ValueError(
                f"Cannot build one tree from roots {root.name!r} "
                f"and {flat.path[0]!r}",
            )
        _insert(root, flat)

    return _to_tree(root)


def needs_braces(tree: ImportTree) -> bool:
    """Whether the children of `tree` are written inside braces."""
    if not tree.children:
        return False
    if len(tree.children) == 1:
        child = tree.children[0]
        return child.is_self or child.is_glob
    return True


def count_imports(tree: ImportTree) -> int:
    """Number of import targets in a use tree."""
    return len(flatten(tree))
