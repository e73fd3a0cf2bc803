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

"""Time-parameterized paths in configuration space.

A path maps every time of its closed interval ``[t0, t1]`` to a configuration.
Paths may carry a constraint set that is applied to every evaluated
configuration; if the projection fails, evaluation raises ProjectionError.

Extraction keeps the lower bound of the requested range as the start time of
the extracted path, so ``path.extract(t0, t0)`` is a zero-length path that
still starts at ``t0``. Requesting ``extract(ta, tb)`` with ``ta > tb`` yields
the time-reversed trajectory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import copy
from typing import TYPE_CHECKING

import numpy as np

from manip_planner.spec.errors import ProjectionError

if TYPE_CHECKING:
    from manip_planner.spec.protocols import PathConstraint
    from manip_planner.spec.types import Configuration, TimeInterval

TIME_EPSILON = 1e-9


class Path(ABC):
    """Base class of all paths."""

    def __init__(
        self,
        time_range: TimeInterval,
        constraints: PathConstraint | None = None,
    ) -> None:
        t0, t1 = float(time_range[0]), float(time_range[1])
        if t1 < t0:
            raise ValueError(f"Invalid time range ({t0}, {t1})")
        self._time_range = (t0, t1)
        self.constraints = constraints

    @property
    def time_range(self) -> TimeInterval:
        return self._time_range

    def length(self) -> float:
        t0, t1 = self._time_range
        return t1 - t0

    @property
    @abstractmethod
    def output_size(self) -> int:
        """Dimension of the configurations along the path."""
        ...

    @abstractmethod
    def _evaluate(self, t: float) -> Configuration:
        """Unconstrained configuration at time t (t inside the time range)."""
        ...

    @abstractmethod
    def _sub_path(self, t_a: float, t_b: float) -> Path:
        """Unconstrained sub-path from time t_a to t_b, reversed if t_a > t_b."""
        ...

    def __call__(self, t: float) -> Configuration:
        q = np.array(self._evaluate(self._clamp(t)), dtype=np.float64)
        if self.constraints is not None and not self.constraints.apply(q):
            raise ProjectionError(f"Could not project configuration at t={t}")
        return q

    def initial(self) -> Configuration:
        return self(self._time_range[0])

    def end(self) -> Configuration:
        return self(self._time_range[1])

    def extract(self, t_a: float, t_b: float) -> Path:
        """Extract the part of the path between t_a and t_b.

        Raises:
            ValueError: if t_a or t_b is outside the time range.
        """
        t_a, t_b = self._clamp(t_a), self._clamp(t_b)
        sub = self._sub_path(t_a, t_b)
        sub.constraints = self.constraints
        return sub

    def reverse(self) -> Path:
        t0, t1 = self._time_range
        return self.extract(t1, t0)

    def copy(self) -> Path:
        return copy.copy(self)

    def with_constraints(self, constraints: PathConstraint | None) -> Path:
        """Shallow copy of this path with `constraints` attached."""
        other = self.copy()
        other.constraints = constraints
        return other

    def _clamp(self, t: float) -> float:
        t0, t1 = self._time_range
        if t < t0 - TIME_EPSILON or t > t1 + TIME_EPSILON:
            raise ValueError(f"Time {t} outside of path time range ({t0}, {t1})")
        return min(max(float(t), t0), t1)

    def __repr__(self) -> str:
        t0, t1 = self._time_range
        return f"{type(self).__name__}(t0={t0:.4f}, t1={t1:.4f})"


class StraightPath(Path):
    """Linear interpolation between two configurations.

    The default time range is ``(0, ||q_end - q_init||)``: time equals arc
    length, so fractions of ``length()`` are fractions of distance travelled.
    """

    def __init__(
        self,
        q_init: Configuration,
        q_end: Configuration,
        time_range: TimeInterval | None = None,
        constraints: PathConstraint | None = None,
    ) -> None:
        self._q_init = np.array(q_init, dtype=np.float64)
        self._q_end = np.array(q_end, dtype=np.float64)
        if self._q_init.shape != self._q_end.shape:
            raise ValueError(
                f"Configuration size mismatch: {self._q_init.shape} vs {self._q_end.shape}"
            )
        if time_range is None:
            time_range = (0.0, float(np.linalg.norm(self._q_end - self._q_init)))
        super().__init__(time_range, constraints)

    @property
    def output_size(self) -> int:
        return int(self._q_init.shape[0])

    def _evaluate(self, t: float) -> Configuration:
        t0, t1 = self.time_range
        if t1 - t0 <= 0.0 or t <= t0:
            return self._q_init.copy()
        if t >= t1:
            return self._q_end.copy()
        s = (t - t0) / (t1 - t0)
        return self._q_init + s * (self._q_end - self._q_init)

    def _sub_path(self, t_a: float, t_b: float) -> Path:
        return StraightPath(
            self._evaluate(t_a),
            self._evaluate(t_b),
            time_range=(min(t_a, t_b), max(t_a, t_b)),
        )
