import matplotlib

matplotlib.use("Agg")

import pytest

from grounding_engine.models.grid_config import GridConfig


@pytest.fixture
def reference_config():
    return GridConfig()
