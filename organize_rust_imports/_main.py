from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from organize_rust_imports._cargo import dependencies_for
from organize_rust_imports._cargo import read_dependency_set
from organize_rust_imports._data import DependencySet
from organize_rust_imports._data import OrganizeOptions
from organize_rust_imports._organize import organize_source


def check_file(
    filepath: Path,
    fix: bool = False,
    options: OrganizeOptions | None = None,
    dependencies: DependencySet | None = None,
) -> tuple[int, list[str]]:
    """Check whether a file's imports are organized.

    Dependencies default to the ones of the closest Cargo.toml.

    Returns:
        Tuple of (1 if the file needs changes else 0, list of messages)
    """
    messages: list[str] = []

    try:
        source = filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        messages.append(f"Error reading {filepath}: {e}")
        return 0, messages

    if dependencies is None:
        dependencies = dependencies_for(filepath)

    new_source = organize_source(source, dependencies, options)
    if new_source == source:
        return 0, messages

    messages.append(f"{filepath}: imports are not organized")

    if fix:
        filepath.write_text(new_source, encoding="utf-8")
        messages.append(f"Fixed imports in {filepath}")

    return 1, messages


def collect_rust_files(paths: list[Path]) -> list[Path]:
    """Collect all Rust files from given paths."""
    files: list[Path] = []

    for path in paths:
        if path.is_file():
            if path.suffix == ".rs":
                files.append(path)
        elif path.is_dir():
            files.extend(sorted(path.rglob("*.rs")))

    return files


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Merge, sort and group Rust use statements.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s src/main.rs               Report files with unorganized imports
  %(prog)s src/                      Check every .rs file under src/
  %(prog)s --fix src/                Rewrite the imports in place
  %(prog)s --fix --rustfmt src/      Also run the imports through rustfmt
        """,
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files or directories to check",
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Rewrite files in place",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only show summary, not individual files",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        help="Cargo.toml to read dependencies from "
        "(default: closest one above each file)",
    )
    parser.add_argument(
        "--no-group",
        action="store_true",
        help="Keep statements as they are instead of merging and grouping them",
    )
    parser.add_argument(
        "--rustfmt",
        action="store_true",
        help="Format the organized imports with rustfmt",
    )
    parser.add_argument(
        "--edition",
        default="2021",
        help="Rust edition passed to rustfmt (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debugging information to stderr",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    files = collect_rust_files(args.paths)
    if not files:
        print("No Rust files found", file=sys.stderr)
        return 1

    options = OrganizeOptions(
        group_imports=not args.no_group,
        use_rustfmt=args.rustfmt,
        rustfmt_edition=args.edition,
    )
    dependencies = None
    if args.manifest is not None:
        dependencies = read_dependency_set(args.manifest)

    total = 0
    for filepath in files:
        count, messages = check_file(
            filepath, fix=args.fix, options=options, dependencies=dependencies,
        )
        total += count
        if not args.quiet:
            for msg in messages:
                print(msg)

    if total > 0:
        action = "Fixed" if args.fix else "Found"
        print(f"\n{action} unorganized imports in {total} file(s)")
        return 0 if args.fix else 1
    else:
        print("All imports are organized")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
