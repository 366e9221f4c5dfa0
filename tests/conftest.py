from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

from graph import Graph


REFERENCE_CONFIG = Path(__file__).resolve().parent.parent / "ospf_topology.yaml"


@pytest.fixture
def reference_config_path() -> Path:
    return REFERENCE_CONFIG


@pytest.fixture
def triangle() -> Graph:
    # A -1- B -2- C, plus a direct A-C link of 4
    return Graph(["A", "B", "C"], [("A", "B", 1), ("A", "C", 4), ("B", "C", 2)])
