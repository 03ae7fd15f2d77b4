"""Once-per-key data-quality warnings."""

import logging

logger = logging.getLogger(__name__)


class WarningRegistry:
    """Remembers which warnings were already logged.

    Create one per run (or per test) and hand it to the functions that
    report data problems; each distinct key is logged only once.
    """

    def __init__(self, log: logging.Logger | None = None):
        self._seen: set[str] = set()
        self._log = log or logger

    def warn_once(self, key: str, message: str) -> bool:
        """Log ``message`` the first time ``key`` is seen.

        Returns True when the warning was logged, False if it was a repeat.
        """
        if key in self._seen:
            return False
        self._seen.add(key)
        self._log.warning(message)
        return True

    def seen(self, key: str) -> bool:
        return key in self._seen

    def reset(self):
        self._seen.clear()

    def __len__(self) -> int:
        return len(self._seen)
