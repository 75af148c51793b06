import pytest

from holdem.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test reads settings from its own environment."""
    for name in ("ITERATIONS", "WORKERS", "BATCH_SIZE"):
        monkeypatch.delenv(f"HOLDEM_EQUITY_{name}", raising=False)
    monkeypatch.delenv("HOLDEM_EXACT_THRESHOLD", raising=False)
    monkeypatch.delenv("HOLDEM_LOG_LEVEL", raising=False)
    reset_settings()
    yield
    reset_settings()
