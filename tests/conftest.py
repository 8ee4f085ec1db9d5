import logging
import os
from pathlib import Path

# Must be set before importing any application module, as the configs are loaded on import
os.environ.setdefault("CONFIGS_FILE", str(Path(__file__).parent.parent / "configs.yaml"))

import pytest  # noqa: E402
from _pytest.monkeypatch import MonkeyPatch  # noqa: E402

from configs import configs  # noqa: E402


@pytest.fixture(scope="module")
def monkeypatch_module():
    """Monkeypatch objet to be used in "module" scoped fixture"""
    mp = MonkeyPatch()
    yield mp
    mp.undo()


@pytest.fixture(scope="session", autouse=True)
def cleanup_logging_handlers():
    yield

    for handler in logging.root.handlers:
        if isinstance(handler, logging.StreamHandler):
            logging.root.removeHandler(handler)


@pytest.fixture(scope="function")
def temp_dir(tmp_path) -> Path:
    """Create a temporary directory for a test"""
    return tmp_path


@pytest.fixture(scope="function")
def file_queue_config(temp_dir) -> dict:
    """Configuration for a file queue stored in the test's temporary directory"""
    return {
        "type": "file",
        "path": str(temp_dir),
        "invisibility_duration": 10,
        "lock_timeout": 1,
        "lock_retry_interval": 0.01,
    }


@pytest.fixture(scope="function", autouse=True)
def application_queue(monkeypatch, file_queue_config):
    """Use a file queue in a temporary directory as the application queue for each test"""
    monkeypatch.setattr(configs, "application_queue", file_queue_config)
