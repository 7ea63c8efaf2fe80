import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from limebuild import utils
from limebuild.config import ConfigLoader, reset_config, set_config


@pytest.fixture(autouse=True)
def build_options(tmp_path_factory):
    """Isolate every test from the caller's limebuild.yaml and LIMEBUILD_* variables."""
    config_dir = tmp_path_factory.mktemp("config")
    config = ConfigLoader(config_file=config_dir / "limebuild.yaml", environ={})
    set_config(config)
    utils.configure_logging(config.options)
    yield config
    reset_config()


@pytest.fixture
def configure(tmp_path_factory):
    """Install build options parsed from an environment mapping."""
    def _configure(**environ):
        config_dir = tmp_path_factory.mktemp("config")
        config = ConfigLoader(config_file=config_dir / "limebuild.yaml", environ=environ)
        set_config(config)
        return config
    return _configure
