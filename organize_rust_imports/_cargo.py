"""Read crate names from Cargo.toml."""
from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from organize_rust_imports._data import DependencySet
from organize_rust_imports._data import normalize_crate_name

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"


def _table_names(table: Any) -> set[str]:
    """Crate names declared in a dependency table."""
    names: set[str] = set()
    if not isinstance(table, dict):
        return names

    for key, value in table.items():
        names.add(normalize_crate_name(key))
        # Renamed dependency: `serde_json_alt = { package = "serde_json" }`
        if isinstance(value, dict) and isinstance(value.get("package"), str):
            names.add(normalize_crate_name(value["package"]))
    return names


def dependency_set_from_manifest(manifest: dict[str, Any]) -> DependencySet:
    """Build a DependencySet from a parsed Cargo.toml document."""
    dependencies = _table_names(manifest.get("dependencies"))
    dev_dependencies = _table_names(manifest.get("dev-dependencies"))
    build_dependencies = _table_names(manifest.get("build-dependencies"))

    workspace = manifest.get("workspace")
    if isinstance(workspace, dict):
        dependencies |= _table_names(workspace.get("dependencies"))

    # [target.'cfg(unix)'.dependencies] and friends
    targets = manifest.get("target")
    if isinstance(targets, dict):
        for target in targets.values():
            if not isinstance(target, dict):
                continue
            dependencies |= _table_names(target.get("dependencies"))
            dev_dependencies |= _table_names(target.get("dev-dependencies"))
            build_dependencies |= _table_names(target.get("build-dependencies"))

    return DependencySet(
        dependencies=frozenset(dependencies),
        dev_dependencies=frozenset(dev_dependencies),
        build_dependencies=frozenset(build_dependencies),
    )


def read_dependency_set(manifest_path: Path) -> DependencySet:
    """Read dependency names from a Cargo.toml.

    A missing or unreadable manifest yields an empty set.
    """
    try:
        with manifest_path.open("rb") as f:
            manifest = tomllib.load(f)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Could not read %s: %s", manifest_path, e)
        return DependencySet()

    return dependency_set_from_manifest(manifest)


def find_cargo_toml(source_path: Path) -> Path | None:
    """Find the closest Cargo.toml in `source_path`'s directory or above."""
    directory = source_path.resolve().parent
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    return None


def dependencies_for(source_path: Path) -> DependencySet:
    """DependencySet of the crate `source_path` belongs to."""
    manifest_path = find_cargo_toml(source_path)
    if manifest_path is None:
        logger.debug("No %s found for %s", MANIFEST_NAME, source_path)
        return DependencySet()
    return read_dependency_set(manifest_path)
