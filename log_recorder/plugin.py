"""pytest plugin: a ``log_recorder`` fixture scoped to one test.

Installed through the ``pytest11`` entry point, so it only loads under pytest
(install the ``test`` extra). Without installing, list it in a conftest with
``pytest_plugins = ["log_recorder.plugin"]``.
Set ``LOG_RECORDER_CONFIG`` to a YAML file to pre-register sources.
"""

import os

import pytest

from log_recorder.config import Config, load_config, load_yaml_config
from log_recorder.recorder import LogRecorder


@pytest.fixture()
def log_recorder_config() -> Config:
    """Config built from LOG_RECORDER_* env vars and the optional YAML file."""
    yaml_data = load_yaml_config(os.environ.get("LOG_RECORDER_CONFIG"))
    return load_config(yaml_data)


@pytest.fixture()
def log_recorder(log_recorder_config):
    """A recorder with configured sources registered; closed at teardown.

    Register more sources with ``record`` and start it with ``capture``.
    """
    recorder = LogRecorder.from_config(log_recorder_config)
    try:
        yield recorder
    finally:
        recorder.close()
