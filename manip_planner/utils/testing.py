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

"""Deterministic collaborators for exercising planners in tests and demos."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from manip_planner.spec.types import Configuration


class FixedSampler:
    """Configuration sampler cycling through the given configurations."""

    def __init__(self, *configs: ArrayLike):
        if not configs:
            raise ValueError("FixedSampler needs at least one configuration")
        self._configs = [np.asarray(q, dtype=np.float64) for q in configs]
        self._index = 0

    def shoot(self) -> Configuration:
        q = self._configs[self._index % len(self._configs)]
        self._index += 1
        return q.copy()


def always_valid(q: Configuration) -> bool:
    return True


def wall_at(x: float) -> Callable[[Configuration], bool]:
    """Collision predicate rejecting configurations whose first coordinate exceeds x."""

    def is_config_valid(q: Configuration) -> bool:
        return bool(q[0] <= x)

    return is_config_valid
