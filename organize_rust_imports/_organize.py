"""Organize the imports of a whole file."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from organize_rust_imports._categorize import category_label
from organize_rust_imports._categorize import group_statements
from organize_rust_imports._data import DependencySet
from organize_rust_imports._data import ImportGroup
from organize_rust_imports._data import ImportStatement
from organize_rust_imports._data import ImportSuggestion
from organize_rust_imports._data import OrganizeOptions
from organize_rust_imports._data import Position
from organize_rust_imports._data import Range
from organize_rust_imports._data import ScanResult
from organize_rust_imports._filters import filter_by_unused_spans
from organize_rust_imports._filters import synthesize_statements
from organize_rust_imports._flatten import count_imports
from organize_rust_imports._format import format_statement
from organize_rust_imports._format import render
from organize_rust_imports._merge import merge_statements
from organize_rust_imports._rustfmt import format_with_rustfmt
from organize_rust_imports._scanner import scan_file
from organize_rust_imports._sort import sort_statements

logger = logging.getLogger(__name__)


def organize(
    statements: Iterable[ImportStatement],
    dependencies: DependencySet | None = None,
    log: logging.Logger | None = None,
) -> list[ImportGroup]:
    """Group, merge and sort statements.

    Returns the non-empty groups in display order: std, external,
    internal, then one group per attribute set.
    """
    if log is None:
        log = logger

    groups: list[ImportGroup] = []
    for group in group_statements(statements, dependencies):
        merged = sort_statements(merge_statements(group.statements, log))
        log.debug(
            "%s: %d statement(s) importing %d item(s)",
            category_label(group.category),
            len(merged),
            sum(count_imports(stmt.tree) for stmt in merged),
        )
        groups.append(replace(group, statements=tuple(merged)))
    return groups


def find_insert_line(text: str) -> int:
    """Line to insert imports at in a file that has none.

    That is after inner attributes, module docs, leading comments and
    `extern crate` lines, and before the first `use`/`mod` or other code.
    """
    insert_line = 0
    for i, line in enumerate(text.split("\n")):
        stripped = line.strip()
        if stripped.startswith(("#![", "//!", "extern crate")):
            insert_line = i + 1
        elif not stripped or stripped.startswith("//"):
            if insert_line == i:
                insert_line = i + 1
        elif stripped.startswith(("use ", "mod ", "pub use ", "pub mod ")):
            insert_line = i
            break
        elif not stripped.startswith("#["):
            break
    return insert_line


def _offset(lines: list[str], position: Position) -> int:
    return sum(len(line) + 1 for line in lines[:position.line]) + position.column


def _insert_block(text: str, block: str) -> str:
    if not text.strip():
        return block.rstrip("\n") + "\n"

    lines = text.split("\n")
    at = min(find_insert_line(text), len(lines))

    new_lines = block.rstrip("\n").split("\n")
    if at > 0 and lines[at - 1].strip():
        new_lines.insert(0, "")
    if at < len(lines) and lines[at].strip():
        new_lines.append("")

    logger.debug("Inserting imports at line %d", at + 1)
    return "\n".join(lines[:at] + new_lines + lines[at:])


def _replace_region(
    text: str,
    region: Range,
    block: str,
    has_trailing_blank_line: bool,
) -> str:
    lines = text.split("\n")
    head = text[:_offset(lines, region.start)]
    tail = text[_offset(lines, region.end):]
    block = block.rstrip("\n")

    code_before = bool(lines[region.start.line][:region.start.column].strip())
    code_after = bool(lines[region.end.line][region.end.column:].strip())

    if not block:
        # Every import was removed: drop the emptied line too
        if not code_before and not code_after:
            head = head.rstrip(" \t")
            if tail.startswith("\n"):
                tail = tail[1:]
                if tail.startswith("\n") and (not head or head.endswith("\n\n")):
                    tail = tail[1:]
        return head + tail

    if code_before:
        head = head.rstrip(" \t")
        block = "\n\n" + block
    if code_after:
        tail = tail.lstrip(" \t")
        block += "\n\n"
    elif not has_trailing_blank_line:
        block += "\n"

    return head + block + tail


def _block_headers(text: str, scan: ScanResult) -> dict[int | None, list[str]]:
    """Preserved text inside the imports region, keyed by the block it precedes."""
    headers: dict[int | None, list[str]] = {}
    region = scan.imports_region
    if region is None:
        return headers

    lines = text.split("\n")
    for kept in scan.preserved:
        if not region.contains(kept):
            continue
        following = next(
            (
                stmt for stmt in scan.statements
                if stmt.range is not None and kept.start < stmt.range.start
            ),
            None,
        )
        if following is None:
            continue
        source = text[_offset(lines, kept.start):_offset(lines, kept.end)]
        headers.setdefault(following.block_id, []).append(source)
    return headers


def _render_statements(
    statements: list[ImportStatement],
    dependencies: DependencySet | None,
    options: OrganizeOptions,
    log: logging.Logger | None,
) -> str:
    if options.group_imports:
        return render(organize(statements, dependencies, log)).rstrip("\n")
    return "\n".join(format_statement(s) for s in statements)


def _render_region(
    text: str,
    scan: ScanResult,
    statements: list[ImportStatement],
    added: list[ImportStatement],
    dependencies: DependencySet | None,
    options: OrganizeOptions,
    log: logging.Logger | None,
) -> str:
    """Render each block of the region after its preserved text.

    Blocks are organized independently; suggested imports join the first.
    """
    block_ids = list(dict.fromkeys(stmt.block_id for stmt in scan.statements))
    by_block: dict[int | None, list[ImportStatement]] = {}
    for stmt in statements:
        by_block.setdefault(stmt.block_id, []).append(stmt)
    by_block.setdefault(block_ids[0], []).extend(added)

    headers = _block_headers(text, scan)
    sections: list[str] = []
    for block_id in block_ids:
        parts = list(headers.get(block_id, ()))
        body = _render_statements(
            by_block.get(block_id, []), dependencies, options, log,
        )
        if body:
            parts.append(body)
        if parts:
            sections.append("\n".join(parts))

    if len(block_ids) > 1:
        logger.debug("Organized %d blocks separately", len(block_ids))
    return "\n\n".join(sections)


def organize_source(
    text: str,
    dependencies: DependencySet | None = None,
    options: OrganizeOptions | None = None,
    unused_spans: Iterable[Range] | None = None,
    suggestions: Iterable[ImportSuggestion] | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Rewrite the imports region of a Rust source file.

    `unused_spans` and `suggestions` are the symbol resolver's findings;
    both are optional. Comments and statements that can't be parsed are
    kept where they are, and the statements between them are organized
    block by block. Returns `text` unchanged when there is nothing to do.
    """
    if options is None:
        options = OrganizeOptions()

    scan = scan_file(text)
    statements = scan.statements

    if options.remove_unused and unused_spans is not None:
        statements = filter_by_unused_spans(statements, unused_spans)

    added: list[ImportStatement] = []
    if options.auto_import and suggestions is not None:
        added = synthesize_statements(suggestions)

    if scan.imports_region is None:
        if not added:
            return text
        block = _render_statements(added, dependencies, options, log)
    else:
        block = _render_region(
            text, scan, statements, added, dependencies, options, log,
        )

    if options.use_rustfmt and block:
        block = format_with_rustfmt(block, edition=options.rustfmt_edition)

    if scan.imports_region is None:
        return _insert_block(text, block)

    return _replace_region(
        text, scan.imports_region, block, scan.has_trailing_blank_line,
    )
