import matplotlib

matplotlib.use("Agg")

import pytest
from hypothesis import HealthCheck, settings

from hotplate.config import SimulationConfig
from hotplate.model.plate import Plate, init_plate

settings.register_profile(
    "default",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("default")


@pytest.fixture
def default_plate() -> Plate:
    return init_plate()


@pytest.fixture
def small_config(tmp_path) -> SimulationConfig:
    """A 5x5 run that reads and writes inside a temporary directory."""
    return SimulationConfig(
        plate_size=5,
        csv_path=tmp_path / "Hotplate.csv",
        input_path=tmp_path / "Inputplate.txt",
    )
