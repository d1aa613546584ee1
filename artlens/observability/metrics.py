"""In-process metrics collector with no external dependencies."""

from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass, field


@dataclass
class MetricsCollector:
    request_count: int = 0
    identified_count: int = 0
    stage_counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    matched_count: int = 0
    latencies: list[int] = field(default_factory=list)
    _start_time: float = field(default_factory=time.time)

    def record_recognition(
        self, final_stage: str, identified: bool, matched: bool = False, latency_ms: int = 0,
    ) -> None:
        self.request_count += 1
        self.stage_counts[final_stage] += 1
        if identified:
            self.identified_count += 1
        if matched:
            self.matched_count += 1
        if latency_ms:
            self.latencies.append(latency_ms)
            if len(self.latencies) > 1000:
                self.latencies = self.latencies[-500:]

    def summary(self) -> dict:
        avg_latency = sum(self.latencies) / len(self.latencies) if self.latencies else 0
        return {
            "uptime_seconds": int(time.time() - self._start_time),
            "total_requests": self.request_count,
            "identified": self.identified_count,
            "catalog_matches": self.matched_count,
            "final_stages": dict(self.stage_counts),
            "avg_latency_ms": int(avg_latency),
        }
