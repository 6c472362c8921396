"""pytest plugin for json-data-explorer.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from json_data_explorer import DataExplorerStore, ExplorerConfig


@pytest.fixture
def make_explorer_store() -> Any:
    """Fixture that returns a factory for populated ``DataExplorerStore`` objects.

    Function-scoped: every store built through the factory is fresh, so
    collapse/expand state never leaks between tests.

    Usage in tests::

        def test_collapse(make_explorer_store):
            store = make_explorer_store({"a": {"b": 1}})
            store.collapse_node(store.display_nodes[0])
            assert len(store.display_nodes) == 1

    Returns:
        A callable ``_make(document, is_all_collapsed=False, config=None,
        scroll_controller=None) -> DataExplorerStore``.
    """

    def _make(
        document: Any,
        is_all_collapsed: bool = False,
        config: ExplorerConfig | None = None,
        scroll_controller: Any = None,
    ) -> DataExplorerStore:
        store = DataExplorerStore(config=config, scroll_controller=scroll_controller)
        store.build_nodes(document, is_all_collapsed=is_all_collapsed)
        return store

    return _make


@pytest.fixture(scope="session")
def assert_display_keys() -> Any:
    """Fixture that returns a callable display-list asserter.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_keys(make_explorer_store, assert_display_keys):
            store = make_explorer_store({"a": {"b": 1}})
            assert_display_keys(store, ["a", "b"])

    Returns:
        A callable ``_assert(store, expected_keys) -> None`` that raises
        ``AssertionError`` when the display list keys differ.
    """

    def _assert(store: DataExplorerStore, expected_keys: Sequence[str]) -> None:
        """Assert that the store displays exactly ``expected_keys`` in order.

        Raises:
            AssertionError: With both key lists and the first differing row.
        """
        actual = [node.key for node in store.display_nodes]
        expected = list(expected_keys)
        if actual != expected:
            first_diff = next(
                (
                    i
                    for i, (a, e) in enumerate(zip(actual, expected, strict=False))
                    if a != e
                ),
                min(len(actual), len(expected)),
            )
            raise AssertionError(
                f"Display list mismatch at row {first_diff}\n"
                f"  actual ({len(actual)}):   {actual}\n"
                f"  expected ({len(expected)}): {expected}"
            )

    return _assert
