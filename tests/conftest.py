import io

import pytest

from teelog.logging import ConsoleSink
from teelog.logging import core as logging_core


@pytest.fixture
def console_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_buffer: io.StringIO) -> ConsoleSink:
    """Console sink writing into an in-memory buffer."""
    return ConsoleSink(console_buffer)


@pytest.fixture(autouse=True)
def reset_default_logger(monkeypatch):
    """
    Isolates the process-wide facade between tests.
    Any facade installed by a test is closed afterwards.
    """
    monkeypatch.setattr(logging_core, "_default", None)
    yield
    if logging_core._default is not None:
        logging_core._default.close()


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch, tmp_path):
    """Keeps TEELOG_* variables and stray .env files out of settings tests."""
    for name in [
        "TEELOG_LOG_FORMAT",
        "TEELOG_LOG_FILE_PATH",
        "TEELOG_LOG_ROTATE",
        "TEELOG_LOG_MAX_SIZE",
        "TEELOG_LOG_MAX_BACKUPS",
        "TEELOG_LOG_MAX_AGE",
        "TEELOG_LOG_COMPRESS",
        "TEELOG_LOG_TIMESTAMP_FORMAT",
        "TEELOG_LOG_SEPARATOR",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
