"""
Pytest configuration and shared fixtures for thermometer chart tests.
"""
import os
import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # Headless backend for all chart tests

import pytest
from matplotlib.figure import Figure

# Add src to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from thermometer_chart.core.config import ChartConfig, get_config
from thermometer_chart.core.models import build_properties


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep configuration independent of the developer's environment."""
    for name in list(os.environ):
        if name.startswith("THERMO_"):
            monkeypatch.delenv(name)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def chart_config():
    """Default drawing configuration."""
    return ChartConfig()


@pytest.fixture
def example_values():
    """Example chart: three areas on a 0-20 stem with two goals."""
    return {
        'area_data': [5, 4, 7],
        'area_labels': ['Donations', 'Grants', 'Sponsors'],
        'limits': [0, 20],
        'goal_data': [10, 18],
        'goal_labels': ['Phase 1', 'Phase 2'],
    }


@pytest.fixture
def example_props(example_values):
    return build_properties(**example_values)


@pytest.fixture
def figure():
    """Fresh figure not registered with pyplot."""
    return Figure(figsize=(3, 8))


@pytest.fixture
def data_vectors():
    """Area data vectors paired with limits, covering clipping cases."""
    return [
        ([5, 4, 7], (0, 20)),
        ([10, 8, 7], (0, 20)),
        ([15, 10, 5], (0, 20)),
        ([30], (0, 20)),
        ([0, 3, 0, 2], (0, 20)),
        ([2, 3], (5, 15)),
        ([0.1, 0.2, 0.3], (0, 1)),
        ([1] * 12, (0, 100)),
    ]
