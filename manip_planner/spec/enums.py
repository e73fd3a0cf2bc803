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

"""Enumerations for manipulation planning."""

from enum import Enum, auto


class FailureReason(Enum):
    """Reason an extension along a transition-graph edge failed or was cut short.

    Declaration order is the reporting order used by the planner statistics.
    """

    PROJECTION_FAILED = "[Fail] Projection"
    STEERING_METHOD_FAILED = "[Fail] SteeringMethod"
    PATH_VALIDATION_ZERO_LENGTH = "[Fail] Path validation returned length 0"
    PATH_PROJECTION_ZERO_LENGTH = "[Fail] Path could not be projected"
    PATH_PROJECTION_SHORTENED = "[Info] Path could not be fully projected"
    PATH_VALIDATION_SHORTENED = "[Info] Path could not be fully validated"
    PARTIALLY_EXTENDED = "[Info] Extended partly"

    @property
    def label(self) -> str:
        return self.value


class PlanningStatus(Enum):
    """Status of motion planning."""

    SUCCESS = auto()
    NO_SOLUTION = auto()
    TIMEOUT = auto()
    INVALID_START = auto()
    INVALID_GOAL = auto()
