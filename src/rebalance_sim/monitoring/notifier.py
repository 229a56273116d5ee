"""Notification backends."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO


class Notifier:
    def notify(self, event: str, message: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class LogNotifier(Notifier):
    prefix: str = "[REBALANCE-SIM]"
    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def notify(self, event: str, message: str) -> None:
        print(f"{self.prefix} {event}: {message}", file=self.stream)
