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

"""Roadmap nodes, edges and connected components."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from manip_planner.graph.graph_node import GraphNode
    from manip_planner.paths.path import Path
    from manip_planner.spec.types import Configuration


@dataclass(eq=False)
class RoadmapEdge:
    """Directed roadmap edge carrying the validated path from `from_node` to `to_node`."""

    from_node: RoadmapNode
    to_node: RoadmapNode
    path: Path


@dataclass(eq=False)
class RoadmapNode:
    """Configuration stored in the roadmap.

    Attributes:
        configuration: Read-only configuration vector
        graph_node: Transition-graph node the configuration was classified
            into (None if it could not be classified)
        connected_component: Component the node currently belongs to
        out_edges: Edges leaving this node, keyed by destination node
        in_edges: Edges entering this node, keyed by source node
    """

    configuration: Configuration
    graph_node: GraphNode | None = None
    connected_component: ConnectedComponent | None = None
    out_edges: dict[RoadmapNode, RoadmapEdge] = field(default_factory=dict)
    in_edges: dict[RoadmapNode, RoadmapEdge] = field(default_factory=dict)

    def is_out_neighbor(self, other: RoadmapNode) -> bool:
        """True if an edge self -> other exists."""
        return other in self.out_edges

    def is_in_neighbor(self, other: RoadmapNode) -> bool:
        """True if an edge other -> self exists."""
        return other in self.in_edges

    def __repr__(self) -> str:
        mode = self.graph_node.name if self.graph_node is not None else None
        return f"RoadmapNode({self.configuration.tolist()}, mode={mode})"


class ConnectedComponent:
    """Maximal set of roadmap nodes mutually reachable through roadmap edges.

    `reachable_to` / `reachable_from` hold the components this one has a
    direct edge to / from. They form an acyclic graph: a cycle is merged by
    the roadmap as soon as it appears.
    """

    def __init__(self) -> None:
        self._nodes: list[RoadmapNode] = []
        self.reachable_to: set[ConnectedComponent] = set()
        self.reachable_from: set[ConnectedComponent] = set()

    @property
    def nodes(self) -> list[RoadmapNode]:
        return list(self._nodes)

    def add_node(self, node: RoadmapNode) -> None:
        self._nodes.append(node)
        node.connected_component = self

    def __len__(self) -> int:
        return len(self._nodes)

    def descendants(self) -> set[ConnectedComponent]:
        """Components reachable from this one, itself included."""
        return _closure(self, lambda cc: cc.reachable_to)

    def ancestors(self) -> set[ConnectedComponent]:
        """Components that can reach this one, itself included."""
        return _closure(self, lambda cc: cc.reachable_from)

    def can_reach(self, other: ConnectedComponent) -> bool:
        return other in self.descendants()

    def __repr__(self) -> str:
        return f"ConnectedComponent(nodes={len(self._nodes)})"


def _closure(start, neighbors) -> set[ConnectedComponent]:
    seen = {start}
    queue = deque([start])
    while queue:
        for other in neighbors(queue.popleft()):
            if other not in seen:
                seen.add(other)
                queue.append(other)
    return seen
