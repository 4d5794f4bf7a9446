"""Packaging correctness verification for json-schema-diff.

Tests validate:
- Top-level import exposes the public API
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the installed package imports and works."""

    def test_import_json_schema_diff(self) -> None:
        import json_schema_diff

        assert hasattr(json_schema_diff, "compare")
        assert hasattr(json_schema_diff, "compare_documents")
        assert hasattr(json_schema_diff, "is_compatible")

    def test_compare_basic(self) -> None:
        from json_schema_diff import compare_documents

        assert compare_documents({"type": "string"}, {"type": "string"}) == []

    def test_null_handler_installed(self) -> None:
        import logging

        import json_schema_diff  # noqa: F401

        handlers = logging.getLogger("json_schema_diff").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        try:
            result = subprocess.run(
                ["poetry", "build", "-f", "wheel"],
                cwd=str(PROJECT_ROOT),
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            pytest.skip("poetry is not installed")
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path) -> None:
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert any(n.endswith("py.typed") for n in names), (
                f"py.typed not found in wheel. Contents: {names}"
            )

    def test_no_pycache_in_wheel(self, wheel_path: Path) -> None:
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path) -> None:
        expected_modules = [
            "json_schema_diff/__init__.py",
            "json_schema_diff/api.py",
            "json_schema_diff/config.py",
            "json_schema_diff/exceptions.py",
            "json_schema_diff/result.py",
            "json_schema_diff/diff/__init__.py",
            "json_schema_diff/diff/arrays.py",
            "json_schema_diff/diff/combined.py",
            "json_schema_diff/diff/content_model.py",
            "json_schema_diff/diff/context.py",
            "json_schema_diff/diff/engine.py",
            "json_schema_diff/diff/matcher.py",
            "json_schema_diff/diff/objects.py",
            "json_schema_diff/diff/primitives.py",
            "json_schema_diff/schema/__init__.py",
            "json_schema_diff/schema/loader.py",
            "json_schema_diff/schema/nodes.py",
            "json_schema_diff/schema/version.py",
            "json_schema_diff/integrations/__init__.py",
            "json_schema_diff/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), f"Module {module} not found in wheel"

    def test_metadata_in_wheel(self, wheel_path: Path) -> None:
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if "METADATA" in n]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "json-schema-diff" in metadata.lower() or "json_schema_diff" in metadata.lower()
            assert "0.1.0" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self) -> None:
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")
        schema_eps = [
            ep
            for ep in pytest11_eps
            if "schema" in ep.name.lower() or "schema" in str(ep.value).lower()
        ]
        assert schema_eps, (
            f"No pytest11 entry point found for json-schema-diff. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixture_available(self) -> None:
        import importlib

        mod = importlib.import_module("json_schema_diff.integrations._pytest_plugin")
        assert hasattr(mod, "assert_schema_compatible")
        assert callable(mod.assert_schema_compatible)


class TestPackageMetadata:
    """Verify the public surface."""

    def test_version(self) -> None:
        import json_schema_diff

        assert json_schema_diff.__version__ == "0.1.0"

    def test_all_exports(self) -> None:
        import json_schema_diff

        expected = {
            "COMPATIBLE_CHANGES_LENIENT",
            "COMPATIBLE_CHANGES_STRICT",
            "ArraySchema",
            "CombinedSchema",
            "CompatibilityLevel",
            "ConstSchema",
            "Difference",
            "DifferenceType",
            "EmptySchema",
            "EnumSchema",
            "FalseSchema",
            "InvalidSchemaError",
            "JsonSchemaVersion",
            "NotSchema",
            "NumberSchema",
            "ObjectSchema",
            "Schema",
            "SchemaLoader",
            "StringSchema",
            "ValidationCriterion",
            "compare",
            "compare_documents",
            "incompatible_differences",
            "is_compatible",
            "load_schema",
            "resolve_compatible_changes",
        }
        actual = set(json_schema_diff.__all__)
        assert expected == actual, f"Missing: {expected - actual}, Extra: {actual - expected}"

    def test_all_names_resolve(self) -> None:
        import json_schema_diff

        for name in json_schema_diff.__all__:
            assert hasattr(json_schema_diff, name), name
