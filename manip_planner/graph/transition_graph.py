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

"""In-memory transition graph implementing TransitionGraphSpec."""

from __future__ import annotations

from collections.abc import Set
import itertools
from typing import TYPE_CHECKING

import numpy as np

from manip_planner.constraints import ConstraintSet
from manip_planner.graph.graph_edge import GraphEdge
from manip_planner.graph.graph_node import GraphNode, NodeSelector
from manip_planner.spec.errors import ClassificationError
from manip_planner.utils.logging_config import setup_logger

if TYPE_CHECKING:
    from manip_planner.roadmap.roadmap_node import RoadmapNode
    from manip_planner.spec.protocols import SteeringMethod
    from manip_planner.spec.types import Configuration

logger = setup_logger()


class TransitionGraph:
    """Graph of manipulation modes (nodes) and the transitions between them (edges).

    Example:
        graph = TransitionGraph("pick")
        free = graph.create_node("free")
        grasp = graph.create_node("grasp", grasp_constraints)
        graph.create_edge(free, free, "transit", path_constraints=object_locked)
        graph.create_edge(free, grasp, "approach", path_constraints=object_locked)
    """

    def __init__(
        self,
        name: str = "graph",
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        self.name = name
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._node_selector = NodeSelector(f"{name}/node-selector")
        self._edges: list[GraphEdge] = []
        self._node_ids = itertools.count()
        self._edge_ids = itertools.count()

    # Construction

    def create_node(self, name: str, constraints: ConstraintSet | None = None) -> GraphNode:
        node = GraphNode(
            id=next(self._node_ids),
            name=name,
            constraints=constraints if constraints is not None else ConstraintSet(name=name),
        )
        self._node_selector.add_node(node)
        return node

    def create_edge(
        self,
        from_node: GraphNode,
        to_node: GraphNode,
        name: str,
        path_constraints: ConstraintSet | None = None,
        steering_method: SteeringMethod | None = None,
        weight: float = 1.0,
    ) -> GraphEdge:
        edge = GraphEdge(
            next(self._edge_ids),
            name,
            from_node,
            to_node,
            path_constraints=path_constraints,
            steering_method=steering_method,
            weight=weight,
        )
        self._edges.append(edge)
        logger.debug("Created graph edge", edge=name, id=edge.id)
        return edge

    # Queries

    @property
    def node_selector(self) -> NodeSelector:
        return self._node_selector

    def nodes(self) -> list[GraphNode]:
        return self._node_selector.get_nodes()

    def edges(self) -> list[GraphEdge]:
        return list(self._edges)

    def get_node(self, q: Configuration) -> frozenset[GraphNode]:
        """All nodes containing q.

        Raises:
            ClassificationError: if no node contains q.
        """
        nodes = frozenset(node for node in self.nodes() if node.contains(q))
        if not nodes:
            raise ClassificationError(f"Configuration {q} is not in any node of '{self.name}'")
        return nodes

    def out_edges(self, node: GraphNode) -> list[GraphEdge]:
        return [edge for edge in self._edges if edge.from_node is node]

    def choose_edge(self, node: RoadmapNode) -> GraphEdge | None:
        """Weighted random choice among the outgoing edges of the node's mode."""
        graph_node = node.graph_node
        if graph_node is None:
            return None
        candidates = [edge for edge in self.out_edges(graph_node) if edge.weight > 0]
        if not candidates:
            return None
        weights = np.array([edge.weight for edge in candidates], dtype=np.float64)
        index = int(self._rng.choice(len(candidates), p=weights / weights.sum()))
        return candidates[index]

    def edges_between(
        self, origins: Set[GraphNode], destinations: Set[GraphNode]
    ) -> list[GraphEdge]:
        """Edges from any node of `origins` to any node of `destinations`, by id."""
        return [
            edge
            for edge in self._edges
            if edge.from_node in origins and edge.to_node in destinations
        ]

    def path_constraint(self, edge: GraphEdge) -> ConstraintSet:
        return edge.path_constraint()
