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

from unittest.mock import MagicMock

from manip_planner.planners.statistics import EdgeStatisticsTable, SuccessStatistics
from manip_planner.spec.enums import FailureReason


def _edge(edge_id, name="edge"):
    edge = MagicMock()
    edge.id = edge_id
    edge.name = name
    return edge


class TestSuccessStatistics:
    def test_counts(self):
        stats = SuccessStatistics("transit")
        stats.add_success()
        stats.add_success()
        stats.add_failure(FailureReason.PROJECTION_FAILED)
        stats.add_failure(FailureReason.PARTIALLY_EXTENDED)

        assert stats.nb_success() == 2
        assert stats.nb_failure(FailureReason.PROJECTION_FAILED) == 1
        assert stats.nb_failure(FailureReason.STEERING_METHOD_FAILED) == 0
        assert stats.nb_attempts() == 4

    def test_str_lists_labels(self):
        stats = SuccessStatistics("transit")
        stats.add_failure(FailureReason.STEERING_METHOD_FAILED)
        text = str(stats)
        assert text.startswith("transit: 0 successes / 1 attempts")
        assert "[Fail] SteeringMethod: 1" in text
        assert "[Fail] Projection" not in text

    def test_labels(self):
        assert FailureReason.PATH_VALIDATION_ZERO_LENGTH.label == (
            "[Fail] Path validation returned length 0"
        )
        assert FailureReason.PARTIALLY_EXTENDED.label == "[Info] Extended partly"


class TestEdgeStatisticsTable:
    def test_lazy_insert(self):
        table = EdgeStatisticsTable()
        assert table.get(4) is None
        assert len(table) == 0

        record = table.stat_for(_edge(4, "approach"))
        assert record.name == "approach"
        assert table.get(4) is record
        assert table.stat_for(_edge(4, "approach")) is record
        assert len(table) == 1

    def test_sparse_ids(self):
        table = EdgeStatisticsTable()
        table.stat_for(_edge(1000)).add_success()
        assert len(table) == 1
        assert table.get(999) is None
        assert table.get(1000).nb_success() == 1

    def test_clear(self):
        table = EdgeStatisticsTable()
        table.stat_for(_edge(0))
        table.clear()
        assert table.get(0) is None
