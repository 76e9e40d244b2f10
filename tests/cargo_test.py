"""Tests for reading dependencies from Cargo.toml (_cargo.py)."""
from __future__ import annotations

import logging

from organize_rust_imports._cargo import dependencies_for
from organize_rust_imports._cargo import dependency_set_from_manifest
from organize_rust_imports._cargo import find_cargo_toml
from organize_rust_imports._cargo import read_dependency_set

MANIFEST = '''\
[package]
name = "demo"
version = "0.1.0"

[dependencies]
serde = { version = "1", features = ["derive"] }
serde-json = "1"
json_alt = { package = "simd-json", version = "0.13" }

[dev-dependencies]
pretty_assertions = "1"

[build-dependencies]
cc = "1"

[target.'cfg(unix)'.dependencies]
libc = "0.2"
'''


def test_read_dependency_set(tmp_path):
    manifest = tmp_path / 'Cargo.toml'
    manifest.write_text(MANIFEST)

    deps = read_dependency_set(manifest)

    assert deps.dependencies == frozenset(
        ('serde', 'serde_json', 'json_alt', 'simd_json', 'libc'),
    )
    assert deps.dev_dependencies == frozenset(('pretty_assertions',))
    assert deps.build_dependencies == frozenset(('cc',))
    assert 'serde-json' in deps
    assert 'cc' in deps
    assert 'tokio' not in deps


def test_workspace_dependencies():
    deps = dependency_set_from_manifest({
        'workspace': {'dependencies': {'tokio': {'version': '1'}}},
    })
    assert 'tokio' in deps


def test_manifest_without_dependencies():
    deps = dependency_set_from_manifest({'package': {'name': 'demo'}})
    assert deps.dependencies == frozenset()
    assert 'demo' not in deps


def test_invalid_manifest_gives_empty_set(tmp_path, caplog):
    manifest = tmp_path / 'Cargo.toml'
    manifest.write_text('[dependencies\nserde = "1"\n')

    with caplog.at_level(logging.WARNING):
        deps = read_dependency_set(manifest)

    assert 'serde' not in deps
    assert 'Could not read' in caplog.text


def test_missing_manifest_gives_empty_set(tmp_path):
    deps = read_dependency_set(tmp_path / 'Cargo.toml')
    assert deps.dependencies == frozenset()


def test_find_cargo_toml_walks_up(tmp_path):
    manifest = tmp_path / 'Cargo.toml'
    manifest.write_text(MANIFEST)
    source = tmp_path / 'src' / 'bin' / 'main.rs'
    source.parent.mkdir(parents=True)
    source.write_text('fn main() {}\n')

    assert find_cargo_toml(source) == manifest.resolve()


def test_find_cargo_toml_prefers_closest(tmp_path):
    (tmp_path / 'Cargo.toml').write_text('[workspace]\n')
    member = tmp_path / 'member'
    (member / 'src').mkdir(parents=True)
    (member / 'Cargo.toml').write_text(MANIFEST)
    source = member / 'src' / 'lib.rs'
    source.write_text('')

    assert find_cargo_toml(source) == (member / 'Cargo.toml').resolve()
    assert 'serde' in dependencies_for(source)
