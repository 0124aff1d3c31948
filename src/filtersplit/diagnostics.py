"""
Diagnostics helpers for structured split counters.
"""

from dataclasses import dataclass, field

SPLIT_COUNTER_DEFAULTS: dict[str, int] = {
    "filters_routed_count": 0,
    "filters_excluded_count": 0,
    "groups_split_count": 0,
    "groups_dropped_count": 0,
    "cross_table_filters_count": 0,
}


@dataclass
class Diagnostics:
    counters: dict[str, int] = field(default_factory=dict)

    def incr(self, key: str, amount: int = 1) -> None:
        self.counters[key] = int(self.counters.get(key, 0)) + amount

    def get(self, key: str, default: int = 0) -> int:
        return int(self.counters.get(key, default))

    def to_dict(self) -> dict[str, int]:
        return dict(self.counters)


class SplitDiagnostics(Diagnostics):
    @classmethod
    def create(cls) -> "SplitDiagnostics":
        return cls(counters=dict(SPLIT_COUNTER_DEFAULTS))

    def record_group(self, key_count: int) -> None:
        if key_count == 2:
            self.incr("groups_split_count")
        elif key_count != 1:
            self.incr("groups_dropped_count")
