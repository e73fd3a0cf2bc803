# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Per-edge success/failure bookkeeping for roadmap extensions."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from manip_planner.spec.enums import FailureReason

if TYPE_CHECKING:
    from manip_planner.spec.protocols import GraphEdgeSpec
    from manip_planner.spec.types import EdgeId


class SuccessStatistics:
    """Success counter plus one failure counter per FailureReason."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._successes = 0
        self._failures: Counter[FailureReason] = Counter()

    def add_success(self) -> None:
        self._successes += 1

    def add_failure(self, reason: FailureReason) -> None:
        self._failures[reason] += 1

    def nb_success(self) -> int:
        return self._successes

    def nb_failure(self, reason: FailureReason) -> int:
        return self._failures[reason]

    def nb_attempts(self) -> int:
        return self._successes + sum(self._failures.values())

    def __str__(self) -> str:
        lines = [f"{self.name}: {self._successes} successes / {self.nb_attempts()} attempts"]
        lines.extend(
            f"  {reason.label}: {self._failures[reason]}"
            for reason in FailureReason
            if self._failures[reason]
        )
        return "\n".join(lines)


class EdgeStatisticsTable:
    """Sparse table of SuccessStatistics indexed by transition-graph edge id.

    An edge gets a record the first time ``stat_for`` is called with it.
    """

    def __init__(self) -> None:
        self._records: dict[EdgeId, SuccessStatistics] = {}

    def stat_for(self, edge: GraphEdgeSpec) -> SuccessStatistics:
        record = self._records.get(edge.id)
        if record is None:
            record = self._records[edge.id] = SuccessStatistics(edge.name)
        return record

    def get(self, edge_id: EdgeId) -> SuccessStatistics | None:
        return self._records.get(edge_id)

    def __len__(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()
