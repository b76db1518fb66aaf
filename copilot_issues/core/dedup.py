# Tracks the confirmation dialogs already emitted during one agent loop.
# Date: 2026-10-19
# Version: 0.1.0

from typing import Set
from copilot_issues.models.common import Confirmation

class ConfirmationDeduplicator:
    """
    Remembers the confirmations emitted within a single request so the model
    cannot open the same dialog twice. One instance per loop execution.
    """
    def __init__(self):
        self._seen: Set[str] = set()

    def claim(self, confirmation: Confirmation) -> bool:
        """Returns True the first time a confirmation is seen, False afterwards."""
        key = confirmation.key()
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __len__(self) -> int:
        return len(self._seen)
