"""Monitoring exports."""

from rebalance_sim.monitoring.monitor import Monitor
from rebalance_sim.monitoring.notifier import LogNotifier, Notifier

__all__ = [
    "LogNotifier",
    "Monitor",
    "Notifier",
]
