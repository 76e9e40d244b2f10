"""Apply the symbol resolver's feeds: unused imports and imports to add."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import replace

from organize_rust_imports._data import DISCARD_ALIAS
from organize_rust_imports._data import GLOB
from organize_rust_imports._data import FlatImport
from organize_rust_imports._data import ImportStatement
from organize_rust_imports._data import ImportSuggestion
from organize_rust_imports._data import Range
from organize_rust_imports._flatten import build_tree
from organize_rust_imports._flatten import flatten
from organize_rust_imports._sort import sort_tree

logger = logging.getLogger(__name__)

# (statement index, flat import index)
_Location = tuple[int, int]


def _is_unused(flat: FlatImport, unused_spans: list[Range]) -> bool:
    leaf = flat.leaf_span
    if leaf is None:
        return False
    return any(span.contains(leaf) for span in unused_spans)


def filter_by_unused_spans(
    statements: Iterable[ImportStatement],
    unused_spans: Iterable[Range],
) -> list[ImportStatement]:
    """Drop the imports whose name lies inside one of `unused_spans`.

    A statement losing some imports is rebuilt from the rest; one losing
    all of them is dropped. When an import is reported unused but the same
    path is also imported as `_`, the `_` import is the one removed.
    """
    statements = list(statements)
    unused_spans = list(unused_spans)
    if not unused_spans:
        return statements

    flattened = [flatten(stmt.tree) for stmt in statements]

    discard_variants: dict[str, list[_Location]] = {}
    for i, flat_imports in enumerate(flattened):
        for j, flat in enumerate(flat_imports):
            if flat.alias == DISCARD_ALIAS:
                discard_variants.setdefault(flat.key, []).append((i, j))

    removed: set[_Location] = set()
    for i, flat_imports in enumerate(flattened):
        for j, flat in enumerate(flat_imports):
            if not _is_unused(flat, unused_spans):
                continue
            if flat.alias is None:
                twins = [
                    loc for loc in discard_variants.get(flat.key, ())
                    if loc not in removed
                ]
                if twins:
                    logger.debug("Removing `%s as _` in favor of `%s`", flat.key, flat.key)
                    removed.add(twins[0])
                    continue
            removed.add((i, j))

    result: list[ImportStatement] = []
    for i, stmt in enumerate(statements):
        kept = [
            flat for j, flat in enumerate(flattened[i]) if (i, j) not in removed
        ]
        if len(kept) == len(flattened[i]):
            result.append(stmt)
        elif kept:
            tree = build_tree(kept)
            assert tree is not None
            result.append(replace(stmt, tree=sort_tree(tree)))
        else:
            logger.debug("Removing unused statement rooted at %r", stmt.root_name)

    return result


def synthesize_statements(
    suggestions: Iterable[ImportSuggestion],
) -> list[ImportStatement]:
    """Build statements for imports proposed by the resolver.

    Trait-like suggestions are imported as `_`: the trait's methods become
    callable without its name entering scope.
    """
    result: list[ImportStatement] = []
    for suggestion in suggestions:
        path = tuple(part.strip() for part in suggestion.path.split("::"))
        if not path or not all(path):
            logger.warning("Ignoring malformed import path %r", suggestion.path)
            continue

        is_glob = path[-1] == GLOB
        if is_glob:
            path = path[:-1]
            if not path:
                logger.warning("Ignoring malformed import path %r", suggestion.path)
                continue

        alias = DISCARD_ALIAS if suggestion.is_trait_like and not is_glob else None
        tree = build_tree([FlatImport(path, alias, is_glob)])
        assert tree is not None
        result.append(ImportStatement(tree=tree))

    return result


def select_unambiguous_suggestions(
    candidates: Mapping[str, Iterable[str]],
) -> list[str]:
    """Keep the paths of symbols that have exactly one candidate import.

    Symbols with several possible paths are left for the user to resolve.
    """
    selected: set[str] = set()
    for symbol, paths in candidates.items():
        distinct = set(paths)
        if len(distinct) == 1:
            selected.update(distinct)
        else:
            logger.debug(
                "Skipping %s: %d candidate imports", symbol, len(distinct),
            )
    return sorted(selected)
