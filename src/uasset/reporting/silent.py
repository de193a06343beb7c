from __future__ import annotations

from typing import Any

from .base import Reporter


class SilentReporter(Reporter):
    """Keeps task tallies but prints nothing; used by ``-r silent``."""

    def status(self, message: str, **fields: Any) -> None:
        pass

    def error(self, message: str, **fields: Any) -> None:
        pass
