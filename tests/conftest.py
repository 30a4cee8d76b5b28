import logging
import os
from collections.abc import Iterator
from typing import Any

import pytest

# Subprocess runs set COVERAGE_PROCESS_START: start measuring on import, and let
# a collector that was already detached stop again without raising.
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


@pytest.fixture(autouse=True)  # type: ignore[misc]
def reset_sqlast_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """The shell's `.verbose` command changes the package logger level; undo it."""
    monkeypatch.delenv("SQLAST_FORMAT", raising=False)
    logger = logging.getLogger("sqlast")
    level = logger.level
    yield
    logger.setLevel(level)
