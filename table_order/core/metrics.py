from __future__ import annotations

from dataclasses import dataclass
from threading import Lock


@dataclass
class CommandMetric:
    total_commands: int = 0
    total_duration_ms: float = 0.0
    error_count: int = 0


class InMemoryCommandMetrics:
    """Per-command counters for the order store, guarded by a lock."""

    def __init__(self) -> None:
        self._metrics: dict[str, CommandMetric] = {}
        self._lock = Lock()

    def observe(self, command: str, duration_ms: float, failed: bool = False) -> None:
        with self._lock:
            metric = self._metrics.setdefault(command, CommandMetric())
            metric.total_commands += 1
            metric.total_duration_ms += duration_ms
            if failed:
                metric.error_count += 1

    def snapshot(self) -> dict[str, dict[str, float | int]]:
        with self._lock:
            result: dict[str, dict[str, float | int]] = {}
            for command, metric in sorted(self._metrics.items()):
                avg = metric.total_duration_ms / metric.total_commands if metric.total_commands else 0.0
                result[command] = {
                    "total_commands": metric.total_commands,
                    "total_duration_ms": round(metric.total_duration_ms, 2),
                    "avg_duration_ms": round(avg, 2),
                    "error_count": metric.error_count,
                }
            return result


command_metrics = InMemoryCommandMetrics()
