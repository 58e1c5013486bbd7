"""Shared fixtures for bar graph tests."""

from __future__ import annotations

import pytest

from bargraph import BarGraph, RecordingSurface


@pytest.fixture
def rows():
    """Two categories, two numerical series."""

    return [
        {"cat": "A", "x": 3, "y": 4},
        {"cat": "B", "x": 1, "y": 2},
    ]


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def make_graph(rows):
    """Return a factory building an initialised BarGraph over ``rows``."""

    def _make(log: bool = False, **settings) -> BarGraph:
        params = {"data": rows, "c_series": "cat", "n_series": ["x", "y"]}
        params.update(settings)
        graph = BarGraph(**params)
        graph.init(log=log)
        return graph

    return _make
