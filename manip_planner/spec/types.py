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

"""Data types for manipulation planning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from manip_planner.spec.enums import PlanningStatus

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from manip_planner.paths.path import Path

# =============================================================================
# Semantic Types (documentation only, not enforced at runtime)
# =============================================================================

Configuration: TypeAlias = "NDArray[np.float64]"
"""Point of the configuration space, shape (n,)"""

EdgeId: TypeAlias = int
"""Stable identifier of a transition-graph edge"""

TimeInterval: TypeAlias = "tuple[float, float]"
"""Closed time interval (t0, t1) of a path"""


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class PlanningResult:
    """Result of a roadmap planning query.

    Attributes:
        status: Planning status
        waypoints: Configurations of the roadmap nodes along the solution
            (empty if failed)
        path: Concatenated roadmap edge paths from start to goal (None if failed)
        planning_time: Time taken to plan (seconds)
        path_length: Total length of ``path``
        iterations: Number of ``one_step`` calls performed
        message: Human-readable status message
    """

    status: PlanningStatus
    waypoints: list[Configuration] = field(default_factory=list)
    path: Path | None = None
    planning_time: float = 0.0
    path_length: float = 0.0
    iterations: int = 0
    message: str = ""

    def is_success(self) -> bool:
        """Check if planning was successful."""
        return self.status == PlanningStatus.SUCCESS
