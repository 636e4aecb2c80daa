"""Session keys owned by the step on screen.

Widget keys created through :class:`StepScopedKeys` are dropped whenever the
wizard moves to another step, mirroring what a full page load would lose.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class StepScopedKeys:
    wizard_id: str

    @property
    def prefix(self) -> str:
        return f"wiz:{self.wizard_id}:"

    def key(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def owns(self, key: str) -> bool:
        return key.startswith(self.prefix)

    def owned(self, keys: Iterable[object]) -> list[str]:
        """Return the keys in ``keys`` that belong to the current step."""

        return [key for key in keys if isinstance(key, str) and self.owns(key)]


__all__ = ["StepScopedKeys"]
