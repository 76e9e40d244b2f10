"""Locate use statements in a Rust source file."""
from __future__ import annotations

import logging
import re

from organize_rust_imports._data import ImportStatement
from organize_rust_imports._data import Position
from organize_rust_imports._data import Range
from organize_rust_imports._data import ScanResult
from organize_rust_imports._parser import ParseError
from organize_rust_imports._parser import parse_statement

logger = logging.getLogger(__name__)

USE_START_RE = re.compile(r"\b(?:pub\s*(?:\([^)]*\))?\s*)?use\s+")
COMMENT_STARTS = ("//", "/*")


def _is_comment(stripped: str) -> bool:
    return stripped.startswith(COMMENT_STARTS)


def _is_attribute(stripped: str) -> bool:
    return stripped.startswith("#[")


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _first_comment(line: str, pos: int = 0) -> int:
    found = [i for i in (line.find(s, pos) for s in COMMENT_STARTS) if i != -1]
    return min(found, default=-1)


def find_statement_start(line: str, pos: int = 0) -> int:
    """Column where a use statement starts in `line` at or after `pos`, or -1."""
    match = USE_START_RE.search(line, pos)
    if match is None:
        return -1
    comment = _first_comment(line, pos)
    if comment != -1 and comment < match.start():
        return -1
    # Inside a block opened earlier on the line (`mod m { use a; }`)
    before = line[pos:match.start()]
    if before.count("{") > before.count("}"):
        return -1
    return match.start()


def find_statement_end(line: str, start: int, depth: int) -> tuple[int, int]:
    """Walk `line` from `start` looking for `;` outside of braces.

    Comments are skipped. Returns (end column after the `;` or -1, brace
    depth at that point).
    """
    col = start
    while col < len(line):
        if line.startswith("//", col):
            break
        if line.startswith("/*", col):
            close = line.find("*/", col + 2)
            if close == -1:
                break
            col = close + 2
            continue
        ch = line[col]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        elif ch == ";" and depth == 0:
            return col + 1, depth
        col += 1
    return -1, depth


def collect_attributes(lines: list[str], use_line: int) -> tuple[list[str], int]:
    """Gather the attribute lines above a statement.

    Blank and comment lines between attributes are skipped. Returns the
    attributes in source order and the first line of the statement's
    footprint (the topmost attribute, or the use line itself).
    """
    attributes: list[str] = []
    first_line = use_line
    i = use_line - 1

    while i >= 0:
        stripped = lines[i].strip()
        if _is_attribute(stripped):
            attributes.insert(0, stripped)
            first_line = i
        elif stripped and not _is_comment(stripped):
            break
        i -= 1

    return attributes, first_line


class FileScanner:
    """Single pass over a file's lines collecting use statements.

    Comment lines inside the imports and statements that can't be
    reorganized are recorded in `preserved` and close the current block.
    Scanning stops at a statement sharing its line with other code.
    """

    def __init__(self, text: str) -> None:
        self.lines = text.split("\n")
        self.statements: list[ImportStatement] = []
        self.preserved: list[Range] = []
        self.block_id = 0
        self.emitted_in_block = False
        self.done = False
        # Footprint of the statements found so far
        self.region_start: Position | None = None
        self.region_end: Position | None = None
        self.last_line_has_trailing_code = False

    def comment_end(self, i: int) -> int:
        """Last line of the comment starting line `i`, or -1 if it has none."""
        stripped = self.lines[i].strip()
        if stripped.startswith("//"):
            return i
        if not stripped.startswith("/*"):
            return -1

        text = stripped[2:]
        while "*/" not in text:
            if i + 1 >= len(self.lines):
                return i
            i += 1
            text = self.lines[i]
        return i

    def skip_preamble(self) -> int:
        """Skip leading blank lines, comments and inner attributes."""
        i = 0
        while i < len(self.lines):
            stripped = self.lines[i].strip()
            end = self.comment_end(i)
            if end != -1:
                i = end + 1
            elif not stripped or stripped.startswith("#!["):
                i += 1
            else:
                break
        return i

    def close_block(self) -> None:
        if self.emitted_in_block:
            self.block_id += 1
            self.emitted_in_block = False

    def preserve(self, kept: Range) -> None:
        # Comment lines between a kept statement's attributes are part of it
        self.preserved = [r for r in self.preserved if not kept.contains(r)]
        self.preserved.append(kept)
        self.close_block()

    def scan(self) -> ScanResult:
        i = self.skip_preamble()
        col = 0  # Non-zero when resuming after a statement on the same line

        while i < len(self.lines) and not self.done:
            line = self.lines[i]

            if col > 0:
                start = find_statement_start(line, col)
                if start == -1:
                    i, col = i + 1, 0
                else:
                    i, col = self.scan_statement(i, start)
                continue

            stripped = line.strip()

            if not stripped:
                i += 1
                continue

            end = self.comment_end(i)
            if end != -1:
                self.preserve(Range(
                    Position(i, _indent(line)),
                    Position(end, len(self.lines[end])),
                ))
                i = end + 1
                continue

            if _is_attribute(stripped):
                # Picked up by collect_attributes once the statement is found
                i += 1
                continue

            start = find_statement_start(line)
            if start == -1:
                if self.statements:
                    break
                i += 1
                continue

            if line[:start].strip() and self.statements:
                # Code before a later statement ends the imports
                break

            i, col = self.scan_statement(i, start)

        return ScanResult(
            statements=self.statements,
            imports_region=self.imports_region(),
            has_trailing_blank_line=self.has_trailing_blank_line(),
            preserved=self.preserved,
        )

    def scan_statement(self, line_index: int, start_col: int) -> tuple[int, int]:
        """Capture the statement starting at (line_index, start_col).

        Returns the (line, column) to resume scanning from.
        """
        line = self.lines[line_index]
        end_col, depth = find_statement_end(line, start_col, 0)

        if end_col != -1:
            parts = [line[start_col:end_col]]
            end_line = line_index
        else:
            parts = [line[start_col:]]
            end_line = line_index + 1
            while end_line < len(self.lines):
                current = self.lines[end_line]
                end_col, depth = find_statement_end(current, 0, depth)
                if end_col != -1:
                    parts.append(current[:end_col])
                    break
                parts.append(current)
                end_line += 1
            else:
                logger.debug(
                    "Unterminated use statement at line %d", line_index + 1,
                )
                return len(self.lines), 0

        last_line = self.lines[end_line]
        rest = last_line[end_col:]
        trailing = rest.strip()
        trailing_comment = _is_comment(trailing)
        # Anything but another statement after the `;` ends the imports
        trailing_code = bool(trailing) and not trailing_comment and (
            find_statement_start(rest) != _indent(rest)
        )

        # Attributes only belong to a statement that starts its line
        if line[:start_col].strip():
            attributes: list[str] = []
            first_line = line_index
        else:
            attributes, first_line = collect_attributes(self.lines, line_index)

        if first_line == line_index:
            footprint_start = Position(line_index, start_col)
        else:
            footprint_start = Position(first_line, _indent(self.lines[first_line]))

        statement_range = Range(
            Position(line_index, start_col), Position(end_line, end_col),
        )
        text = "\n".join(parts)
        statement = None
        if _first_comment(text) != -1:
            logger.debug(
                "Keeping commented use statement at line %d as written",
                line_index + 1,
            )
        else:
            try:
                statement = parse_statement(
                    text,
                    attributes=attributes,
                    range=statement_range,
                    block_id=self.block_id,
                )
            except ParseError as e:
                logger.debug(
                    "Keeping malformed use statement at line %d as written: %s",
                    line_index + 1, e,
                )

        if trailing_comment:
            # The comment stays with its statement
            self.preserve(Range(footprint_start, Position(end_line, len(last_line))))
            return end_line + 1, 0

        if statement is None:
            self.preserve(Range(footprint_start, statement_range.end))
        else:
            self.emit(statement, footprint_start)
            self.last_line_has_trailing_code = trailing_code

        self.done = trailing_code
        return end_line, end_col

    def emit(self, statement: ImportStatement, footprint_start: Position) -> None:
        self.statements.append(statement)
        self.emitted_in_block = True

        if self.region_start is None:
            self.region_start = footprint_start
        assert statement.range is not None
        self.region_end = statement.range.end

    def imports_region(self) -> Range | None:
        if self.region_start is None or self.region_end is None:
            return None
        return Range(self.region_start, self.region_end)

    def has_trailing_blank_line(self) -> bool:
        if self.region_end is None or self.last_line_has_trailing_code:
            return True
        next_line = self.region_end.line + 1
        if next_line >= len(self.lines):
            return True
        return not self.lines[next_line].strip()


def scan_file(text: str) -> ScanResult:
    """Find all top-of-file use statements in a Rust source file."""
    return FileScanner(text).scan()
