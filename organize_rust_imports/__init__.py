from __future__ import annotations

from organize_rust_imports._cargo import find_cargo_toml
from organize_rust_imports._cargo import read_dependency_set
from organize_rust_imports._categorize import categorize
from organize_rust_imports._categorize import group_statements
from organize_rust_imports._data import Category
from organize_rust_imports._data import DependencySet
from organize_rust_imports._data import FlatImport
from organize_rust_imports._data import ImportGroup
from organize_rust_imports._data import ImportStatement
from organize_rust_imports._data import ImportSuggestion
from organize_rust_imports._data import ImportTree
from organize_rust_imports._data import OrganizeOptions
from organize_rust_imports._data import Position
from organize_rust_imports._data import Range
from organize_rust_imports._data import ScanResult
from organize_rust_imports._data import Segment
from organize_rust_imports._filters import filter_by_unused_spans
from organize_rust_imports._filters import select_unambiguous_suggestions
from organize_rust_imports._filters import synthesize_statements
from organize_rust_imports._flatten import build_tree
from organize_rust_imports._flatten import flatten
from organize_rust_imports._format import format_statement
from organize_rust_imports._format import render
from organize_rust_imports._main import check_file
from organize_rust_imports._main import collect_rust_files
from organize_rust_imports._main import main
from organize_rust_imports._merge import MergeAmbiguity
from organize_rust_imports._merge import merge_statements
from organize_rust_imports._organize import organize
from organize_rust_imports._organize import organize_source
from organize_rust_imports._parser import ParseError
from organize_rust_imports._parser import parse_statement
from organize_rust_imports._scanner import scan_file
from organize_rust_imports._sort import sort_statements
from organize_rust_imports._sort import sort_tree

__all__ = [
    # Data types
    "Position",
    "Range",
    "Segment",
    "ImportTree",
    "ImportStatement",
    "FlatImport",
    "Category",
    "DependencySet",
    "ScanResult",
    "ImportGroup",
    "ImportSuggestion",
    "OrganizeOptions",
    # Errors
    "ParseError",
    "MergeAmbiguity",
    # Parsing
    "parse_statement",
    "scan_file",
    # Transformation
    "flatten",
    "build_tree",
    "merge_statements",
    "sort_tree",
    "sort_statements",
    "categorize",
    "group_statements",
    "organize",
    "format_statement",
    "render",
    "organize_source",
    # Resolver feeds
    "filter_by_unused_spans",
    "synthesize_statements",
    "select_unambiguous_suggestions",
    # Manifest
    "find_cargo_toml",
    "read_dependency_set",
    # CLI
    "check_file",
    "collect_rust_files",
    "main",
]
