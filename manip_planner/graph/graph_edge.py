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

"""Transition-graph edges implementing GraphEdgeSpec."""

from __future__ import annotations

from typing import TYPE_CHECKING

from manip_planner.constraints import ConstraintSet
from manip_planner.paths.steering_method import StraightSteeringMethod

if TYPE_CHECKING:
    from manip_planner.graph.graph_node import GraphNode
    from manip_planner.paths.path import Path
    from manip_planner.spec.protocols import SteeringMethod
    from manip_planner.spec.types import Configuration


class GraphEdge:
    """Directed transition between two graph nodes.

    A motion along the edge stays on the leaf of `path_constraints` passing
    through its start configuration, and ends in `to_node`.
    """

    def __init__(
        self,
        edge_id: int,
        name: str,
        from_node: GraphNode,
        to_node: GraphNode,
        path_constraints: ConstraintSet | None = None,
        steering_method: SteeringMethod | None = None,
        weight: float = 1.0,
    ) -> None:
        if weight < 0:
            raise ValueError(f"Edge '{name}': weight must be non-negative, got {weight}")
        self._id = edge_id
        self._name = name
        self.from_node = from_node
        self.to_node = to_node
        self._path_constraints = path_constraints or ConstraintSet(name=f"{name}/path")
        self._config_constraints = ConstraintSet.union(
            to_node.constraints, self._path_constraints, name=f"{name}/config"
        )
        self.steering_method: SteeringMethod = steering_method or StraightSteeringMethod()
        self.weight = weight

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    def path_constraint(self) -> ConstraintSet:
        """Fresh copy of the constraints paths along this edge must satisfy."""
        return self._path_constraints.copy()

    def apply_constraints(self, q_near: Configuration, q: Configuration) -> bool:
        """Project q in place onto the target node, on the leaf through q_near."""
        constraints = self._config_constraints.copy()
        constraints.offset_from_config(q_near)
        return constraints.apply(q)

    def build(self, q_from: Configuration, q_to: Configuration) -> Path | None:
        constraints = self.path_constraint()
        constraints.offset_from_config(q_from)
        if not constraints.is_satisfied(q_to):
            return None
        path = self.steering_method(q_from, q_to)
        if path is None:
            return None
        if len(constraints) == 0:
            return path
        return path.with_constraints(constraints)

    def __repr__(self) -> str:
        return (
            f"GraphEdge({self._id}, {self._name!r}, {self.from_node.name} -> {self.to_node.name})"
        )
