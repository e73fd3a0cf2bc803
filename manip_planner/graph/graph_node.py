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

"""Transition-graph nodes and the node selector."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from manip_planner.constraints import ConstraintSet
from manip_planner.spec.errors import ClassificationError

if TYPE_CHECKING:
    from manip_planner.spec.types import Configuration


@dataclass(eq=False)
class GraphNode:
    """Manipulation mode: the set of configurations satisfying `constraints`.

    Nodes compare and hash by identity.
    """

    id: int
    name: str
    constraints: ConstraintSet = field(default_factory=ConstraintSet)

    def contains(self, q: Configuration) -> bool:
        return self.constraints.is_satisfied(q)

    def __repr__(self) -> str:
        return f"GraphNode({self.id}, {self.name!r})"


class NodeSelector:
    """Ordered collection of graph nodes.

    The order is the classification priority: ``get_node`` returns the first
    node containing a configuration.
    """

    def __init__(self, name: str = "node-selector") -> None:
        self.name = name
        self._nodes: list[GraphNode] = []

    def add_node(self, node: GraphNode) -> None:
        self._nodes.append(node)

    def get_nodes(self) -> list[GraphNode]:
        return list(self._nodes)

    def get_node(self, q: Configuration) -> GraphNode:
        for node in self._nodes:
            if node.contains(q):
                return node
        raise ClassificationError(f"No node of '{self.name}' contains {q}")
