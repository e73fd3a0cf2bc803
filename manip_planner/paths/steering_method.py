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

"""Straight-line steering method implementing SteeringMethod."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from manip_planner.paths.path import StraightPath

if TYPE_CHECKING:
    from manip_planner.spec.protocols import PathConstraint
    from manip_planner.spec.types import Configuration


class StraightSteeringMethod:
    """Connects two configurations by a straight line in configuration space.

    Identical configurations produce no path: a roadmap edge must have
    positive length.
    """

    def __init__(self, constraints: PathConstraint | None = None):
        self._constraints = constraints

    def __call__(self, q1: Configuration, q2: Configuration) -> StraightPath | None:
        q1 = np.asarray(q1, dtype=np.float64)
        q2 = np.asarray(q2, dtype=np.float64)
        if q1.shape != q2.shape or np.array_equal(q1, q2):
            return None
        return StraightPath(q1, q2, constraints=self._constraints)
