"""pytest plugin providing the ``assert_schema_compatible`` fixture.

Registered through the ``pytest11`` entry point in pyproject.toml, so any
project with json-schema-diff installed can guard its schema changes in tests
without touching conftest.py.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_schema_diff import incompatible_differences


@pytest.fixture(scope="session")
def assert_schema_compatible() -> Any:
    """Fixture that returns a callable schema compatibility asserter.

    The fixture is session-scoped because the returned callable is stateless:
    it delegates to ``incompatible_differences``, the same check
    ``is_compatible`` makes, which creates a fresh DiffContext per call.

    Usage in tests::

        def test_widen_limit(assert_schema_compatible):
            assert_schema_compatible(
                {"type": "string", "maxLength": 5},
                {"type": "string", "maxLength": 10},
            )

        def test_type_change(assert_schema_compatible):
            with pytest.raises(AssertionError, match="type_changed"):
                assert_schema_compatible({"type": "string"}, {"type": "integer"})

    Returns:
        A callable ``_assert(original, update, compatible_changes=None) -> None``
        that raises ``AssertionError`` listing the incompatible differences.
    """

    def _assert(original: Any, update: Any, compatible_changes: Any = None) -> None:
        """Assert that ``update`` is a compatible evolution of ``original``.

        Args:
            original:           Loaded ``Schema`` or JSON document/text.
            update:             Loaded ``Schema`` or JSON document/text.
            compatible_changes: Compatible set, level name or kinds; strict
                                when None.

        Raises:
            AssertionError: When any reported difference is not compatible.
        """
        incompatible = incompatible_differences(original, update, compatible_changes)
        if incompatible:
            listing = "\n".join(f"  {d.type} at {d.json_path}" for d in incompatible)
            raise AssertionError(
                f"Schema update is not compatible: "
                f"{len(incompatible)} incompatible difference(s)\n{listing}"
            )

    return _assert
