import pytest

from stat_engine.base.config import EngineConfig


@pytest.fixture(autouse=True)
def engine_config(tmp_path):
    """Isolate the configuration singleton in a temporary directory."""
    EngineConfig.reset_instance()
    config = EngineConfig(config_dir=str(tmp_path / "config"))
    yield config
    EngineConfig.reset_instance()
