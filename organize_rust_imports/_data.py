from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import IntEnum

SELF = "self"
GLOB = "*"
# Alias that imports a name without binding it (`use io::Write as _;`)
DISCARD_ALIAS = "_"


@dataclass(frozen=True, order=True)
class Position:
    """Position in a document (0-indexed line and column)."""

    line: int
    column: int


@dataclass(frozen=True)
class Range:
    """Range in a document (start inclusive, end exclusive)."""

    start: Position
    end: Position

    def contains(self, other: Range) -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class Segment:
    """One path component of a use tree, with optional rename."""

    name: str
    alias: str | None = None
    span: Range | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ImportTree:
    """A use tree node.

    `use std::{io, fs}` is a root node "std" with children "io" and "fs".
    A glob node (`*`) and a self node (`self`) never have children.
    """

    segment: Segment
    children: tuple[ImportTree, ...] | None = None
    is_glob: bool = False

    def __post_init__(self) -> None:
        if self.children is not None and not self.children:
            raise ValueError("children must be None or non-empty")
        if self.children and (self.is_glob or self.is_self):
            raise ValueError(f"{self.segment.name!r} node cannot have children")

    @property
    def name(self) -> str:
        return self.segment.name

    @property
    def is_self(self) -> bool:
        return not self.is_glob and self.segment.name == SELF and not self.children

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass(frozen=True)
class ImportStatement:
    """A complete use statement with metadata."""

    tree: ImportTree
    visibility: str | None = None  # pub, pub(crate), pub(in a::b), ...
    attributes: tuple[str, ...] = ()  # #[cfg(...)] lines, in source order
    # Statement text including visibility, excluding attributes
    range: Range | None = field(default=None, compare=False)
    # Consecutive statements not separated by a comment share a block
    block_id: int | None = field(default=None, compare=False)

    @property
    def root_name(self) -> str:
        return self.tree.segment.name


@dataclass(frozen=True)
class FlatImport:
    """A single fully qualified import target.

    `path` always names the imported item, so `a::{self}` and `a` flatten to
    the same value. A glob import keeps the parent path with `is_glob` set.
    """

    path: tuple[str, ...]
    alias: str | None = None
    is_glob: bool = False
    # One span per path element, followed by the `self`/`*` token if any
    spans: tuple[Range | None, ...] = field(default=(), compare=False)

    @property
    def key(self) -> str:
        """Deduplication key (alias is not part of it)."""
        joined = "::".join(self.path)
        return f"{joined}::{GLOB}" if self.is_glob else joined

    @property
    def leaf_span(self) -> Range | None:
        """Span of the token naming this import (last segment, `self` or `*`)."""
        return self.spans[-1] if self.spans else None


class Category(IntEnum):
    """Import category for grouping, in display order."""

    STD = 0  # std, core, alloc
    EXTERNAL = 1  # Third-party crates
    INTERNAL = 2  # crate::, super::, self::
    ATTRIBUTED = 3  # Imports carrying attributes like #[cfg(test)]


def normalize_crate_name(name: str) -> str:
    """Crates use `-` in Cargo.toml but `_` in paths."""
    return name.replace("-", "_")


@dataclass(frozen=True)
class DependencySet:
    """Known crate names from the manifest, already normalized."""

    dependencies: frozenset[str] = frozenset()
    dev_dependencies: frozenset[str] = frozenset()
    build_dependencies: frozenset[str] = frozenset()

    @classmethod
    def of(cls, *names: str) -> DependencySet:
        return cls(dependencies=frozenset(normalize_crate_name(n) for n in names))

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        normalized = normalize_crate_name(name)
        return (
            normalized in self.dependencies
            or normalized in self.dev_dependencies
            or normalized in self.build_dependencies
        )


@dataclass(frozen=True)
class ScanResult:
    """Result of scanning a Rust file for use statements."""

    statements: list[ImportStatement]
    # From the first import (attributes included) to the end of the last one
    imports_region: Range | None
    # True when a blank line or nothing follows the last import
    has_trailing_blank_line: bool
    # Comments and statements that can't be reorganized, kept as written
    preserved: list[Range] = field(default_factory=list)


@dataclass(frozen=True)
class ImportGroup:
    """Statements of one output category."""

    category: Category
    statements: tuple[ImportStatement, ...]
    # Normalized attribute set of an ATTRIBUTED group, empty otherwise
    attributes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ImportSuggestion:
    """An import to add, as proposed by the symbol resolver."""

    path: str  # e.g. "std::collections::HashMap"
    is_trait_like: bool = False


@dataclass
class OrganizeOptions:
    """Knobs for organize_source / the CLI."""

    group_imports: bool = True
    remove_unused: bool = True
    auto_import: bool = True
    use_rustfmt: bool = False
    rustfmt_edition: str = "2021"
