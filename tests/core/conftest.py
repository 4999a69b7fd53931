"""Pytest fixtures for core tests."""

import pytest


@pytest.fixture
def sample_graph():
    """Graph parsed from the reference sample database."""
    from dagstats.graph import from_string
    from tests.core.graph_test_helpers import SAMPLE_DATABASE

    return from_string(SAMPLE_DATABASE)


@pytest.fixture
def chain_graph():
    """4 -> 3 -> 2 -> 1."""
    from tests.core.graph_test_helpers import build_graph

    return build_graph([(4, 3), (3, 2), (2, 1)])


@pytest.fixture
def diamond_graph():
    """5 -> {3, 4} -> 2 -> 1, plus a shortcut 4 -> 1."""
    from tests.core.graph_test_helpers import build_graph

    return build_graph([(5, 3), (5, 4), (3, 2), (4, 2), (4, 1), (2, 1)])


@pytest.fixture
def origin_only_graph():
    """Graph holding only the origin."""
    from dagstats.graph import from_string

    return from_string("0\n")
