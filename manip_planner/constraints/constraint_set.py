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

"""
Linear Constraint Sets

Equality constraints ``A q = b`` on configurations, used to describe
transition-graph nodes (mode manifolds) and edges (foliation leaves).

## Parametric constraints

A parametric constraint has its right-hand side set from a reference
configuration with ``offset_from_config(q)``. This is how an edge keeps, for
instance, the object pose fixed at whatever value it had at the start of a
transit motion.

## Projection

``apply(q)`` moves ``q`` in place to the closest point (in the least-squares
sense) satisfying all constraints of the set. Contradictory constraints leave
a residual above tolerance and projection reports failure.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import copy
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

    from manip_planner.spec.types import Configuration


@dataclass
class LinearConstraint:
    """Equality constraint ``matrix @ q == rhs``.

    Attributes:
        name: Human-readable constraint name
        matrix: (m, n) coefficient matrix
        rhs: (m,) right-hand side, zeros by default
        parametric: True if rhs is set from a reference configuration
    """

    name: str
    matrix: NDArray[np.float64]
    rhs: NDArray[np.float64] | None = None
    parametric: bool = False

    def __post_init__(self) -> None:
        self.matrix = np.atleast_2d(np.asarray(self.matrix, dtype=np.float64))
        if self.rhs is None:
            self.rhs = np.zeros(self.matrix.shape[0], dtype=np.float64)
        else:
            self.rhs = np.atleast_1d(np.asarray(self.rhs, dtype=np.float64))
        if self.rhs.shape[0] != self.matrix.shape[0]:
            raise ValueError(
                f"Constraint '{self.name}': rhs has {self.rhs.shape[0]} rows, "
                f"matrix has {self.matrix.shape[0]}"
            )

    @classmethod
    def locked_joints(
        cls,
        name: str,
        indices: Sequence[int],
        size: int,
        values: ArrayLike | None = None,
        parametric: bool = False,
    ) -> LinearConstraint:
        """Constraint fixing the configuration components at `indices`."""
        matrix = np.zeros((len(indices), size), dtype=np.float64)
        for row, index in enumerate(indices):
            matrix[row, index] = 1.0
        rhs = None if values is None else np.asarray(values, dtype=np.float64)
        return cls(name=name, matrix=matrix, rhs=rhs, parametric=parametric)

    def residual(self, q: Configuration) -> NDArray[np.float64]:
        return self.matrix @ q - self.rhs

    def offset_from_config(self, q: Configuration) -> None:
        if self.parametric:
            self.rhs = self.matrix @ np.asarray(q, dtype=np.float64)


class ConstraintSet:
    """Stack of linear constraints projected together."""

    def __init__(
        self,
        constraints: Iterable[LinearConstraint] = (),
        name: str = "",
        tolerance: float = 1e-6,
        max_iterations: int = 3,
    ) -> None:
        self.name = name
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self._constraints: list[LinearConstraint] = list(constraints)

    @classmethod
    def union(cls, *sets: ConstraintSet | None, name: str = "") -> ConstraintSet:
        """Concatenate several sets into a new one (constraint objects are copied)."""
        constraints: list[LinearConstraint] = []
        tolerance = 1e-6
        for constraint_set in sets:
            if constraint_set is None:
                continue
            constraints.extend(copy.deepcopy(c) for c in constraint_set.constraints)
            tolerance = constraint_set.tolerance
        return cls(constraints, name=name, tolerance=tolerance)

    @property
    def constraints(self) -> list[LinearConstraint]:
        return list(self._constraints)

    def add(self, constraint: LinearConstraint) -> None:
        self._constraints.append(constraint)

    def __len__(self) -> int:
        return len(self._constraints)

    def _stacked(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        matrix = np.vstack([c.matrix for c in self._constraints])
        rhs = np.concatenate([c.rhs for c in self._constraints])
        return matrix, rhs

    def offset_from_config(self, q: Configuration) -> None:
        for constraint in self._constraints:
            constraint.offset_from_config(q)

    def is_satisfied(self, q: Configuration) -> bool:
        if not self._constraints:
            return True
        matrix, rhs = self._stacked()
        error = matrix @ np.asarray(q, dtype=np.float64) - rhs
        return bool(np.max(np.abs(error)) <= self.tolerance)

    def apply(self, q: Configuration) -> bool:
        """Project q in place. Returns True if q satisfies the set afterwards."""
        if not self._constraints:
            return True
        matrix, rhs = self._stacked()
        for _ in range(self.max_iterations):
            error = matrix @ q - rhs
            if np.max(np.abs(error)) <= self.tolerance:
                return True
            delta, *_ = np.linalg.lstsq(matrix, error, rcond=None)
            q -= delta
        return bool(np.max(np.abs(matrix @ q - rhs)) <= self.tolerance)

    def copy(self) -> ConstraintSet:
        return ConstraintSet(
            copy.deepcopy(self._constraints),
            name=self.name,
            tolerance=self.tolerance,
            max_iterations=self.max_iterations,
        )

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self._constraints)
        return f"ConstraintSet({self.name!r}: [{names}])"
