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
Roadmap

Directed graph of validated configurations, grouped into connected
components, with nearest-neighbour queries restricted to a component and
optionally to a transition-graph node.

Connected components follow strongly-connected semantics: adding an edge
from component A to component B only records that A reaches B; the two are
merged (together with every component on a cycle through them) once B can
reach A as well.

A ``networkx.DiGraph`` mirror of the roadmap, weighted by path length, is
kept up to date for solution extraction.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import networkx as nx
import numpy as np

from manip_planner.paths.path_vector import PathVector
from manip_planner.roadmap.roadmap_node import ConnectedComponent, RoadmapEdge, RoadmapNode
from manip_planner.spec.errors import ClassificationError
from manip_planner.utils.logging_config import setup_logger

if TYPE_CHECKING:
    from manip_planner.graph.graph_node import GraphNode
    from manip_planner.paths.path import Path
    from manip_planner.spec.protocols import TransitionGraphSpec
    from manip_planner.spec.types import Configuration

logger = setup_logger()

DistanceFn = Callable[["Configuration", "Configuration"], float]


def euclidean_distance(q1: Configuration, q2: Configuration) -> float:
    return float(np.linalg.norm(np.asarray(q1) - np.asarray(q2)))


class Roadmap:
    """Roadmap of configurations classified by a transition graph."""

    def __init__(
        self,
        graph: TransitionGraphSpec | None = None,
        distance: DistanceFn = euclidean_distance,
    ) -> None:
        self._graph = graph
        self._distance = distance
        self.clear()

    def clear(self) -> None:
        self._nodes: list[RoadmapNode] = []
        self._node_index: dict[tuple[float, ...], RoadmapNode] = {}
        self._edges: list[RoadmapEdge] = []
        self._components: list[ConnectedComponent] = []
        self._digraph = nx.DiGraph()
        self.init_node: RoadmapNode | None = None
        self.goal_nodes: list[RoadmapNode] = []

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def graph(self) -> TransitionGraphSpec | None:
        return self._graph

    @property
    def nodes(self) -> list[RoadmapNode]:
        return list(self._nodes)

    @property
    def edges(self) -> list[RoadmapEdge]:
        return list(self._edges)

    @property
    def connected_components(self) -> list[ConnectedComponent]:
        """Snapshot of the current components (safe to iterate while inserting)."""
        return list(self._components)

    def has_component(self, component: ConnectedComponent) -> bool:
        """False once `component` has been merged into another one."""
        return any(cc is component for cc in self._components)

    def find_node(self, q: Configuration) -> RoadmapNode | None:
        """Node holding exactly configuration q, if any."""
        return self._node_index.get(_key(q))

    # =========================================================================
    # Insertion
    # =========================================================================

    def add_node(self, q: Configuration) -> RoadmapNode:
        """Insert q in its own component, or return the node already holding q."""
        existing = self.find_node(q)
        if existing is not None:
            return existing

        configuration = np.array(q, dtype=np.float64)
        configuration.flags.writeable = False
        node = RoadmapNode(configuration=configuration, graph_node=self._classify(configuration))

        component = ConnectedComponent()
        component.add_node(node)
        self._components.append(component)
        self._nodes.append(node)
        self._node_index[_key(configuration)] = node
        self._digraph.add_node(node)
        return node

    def add_edge(self, from_node: RoadmapNode, to_node: RoadmapNode, path: Path) -> RoadmapEdge:
        edge = RoadmapEdge(from_node, to_node, path)
        from_node.out_edges.setdefault(to_node, edge)
        to_node.in_edges.setdefault(from_node, edge)
        self._edges.append(edge)

        weight = path.length()
        current = self._digraph.get_edge_data(from_node, to_node)
        if current is None or weight < current["weight"]:
            self._digraph.add_edge(from_node, to_node, weight=weight, edge=edge)

        self._connect_components(from_node.connected_component, to_node.connected_component)
        return edge

    def add_node_and_edges(
        self, near: RoadmapNode, q: Configuration, path: Path
    ) -> RoadmapNode:
        """Insert q linked to `near` by `path` and by its time reversal."""
        node = self.add_node(q)
        self.add_edge(near, node, path)
        self.add_edge(node, near, path.reverse())
        return node

    def set_init_node(self, q: Configuration) -> RoadmapNode:
        self.init_node = self.add_node(q)
        return self.init_node

    def add_goal_node(self, q: Configuration) -> RoadmapNode:
        node = self.add_node(q)
        if node not in self.goal_nodes:
            self.goal_nodes.append(node)
        return node

    def reset_goal_nodes(self) -> None:
        self.goal_nodes = []

    # =========================================================================
    # Nearest neighbours
    # =========================================================================

    def nearest_node(
        self,
        q: Configuration,
        component: ConnectedComponent,
        graph_node: GraphNode | None = None,
    ) -> tuple[RoadmapNode | None, float]:
        """Nearest node of `component` to q, restricted to `graph_node` if given."""
        candidates = [
            node
            for node in component.nodes
            if graph_node is None or node.graph_node is graph_node
        ]
        if not candidates:
            return None, float("inf")
        nearest = min(candidates, key=lambda n: self._distance(n.configuration, q))
        return nearest, self._distance(nearest.configuration, q)

    def k_nearest_search(
        self, q: Configuration, component: ConnectedComponent, k: int
    ) -> list[RoadmapNode]:
        """Up to k nodes of `component` sorted by increasing distance to q."""
        ranked = sorted(component.nodes, key=lambda n: self._distance(n.configuration, q))
        return ranked[:k]

    # =========================================================================
    # Solution
    # =========================================================================

    def path_exists(self) -> bool:
        """True if the init node can reach one of the goal nodes."""
        if self.init_node is None or not self.goal_nodes:
            return False
        reachable = self.init_node.connected_component.descendants()
        return any(goal.connected_component in reachable for goal in self.goal_nodes)

    def shortest_path(self) -> list[RoadmapNode]:
        """Shortest (in path length) node sequence from init to the closest goal."""
        if self.init_node is None:
            return []
        best: list[RoadmapNode] = []
        best_length = float("inf")
        for goal in self.goal_nodes:
            try:
                length, nodes = nx.single_source_dijkstra(
                    self._digraph, self.init_node, goal, weight="weight"
                )
            except nx.NetworkXNoPath:
                continue
            if length < best_length:
                best, best_length = nodes, length
        return best

    def path_along(self, nodes: list[RoadmapNode]) -> PathVector | None:
        """Concatenation of the edge paths along consecutive `nodes`."""
        if len(nodes) < 2:
            return None
        vector = PathVector(output_size=int(nodes[0].configuration.shape[0]))
        for from_node, to_node in zip(nodes[:-1], nodes[1:]):
            vector.append_path(self._digraph.edges[from_node, to_node]["edge"].path)
        return vector

    # =========================================================================
    # Internals
    # =========================================================================

    def _classify(self, q: Configuration) -> GraphNode | None:
        if self._graph is None:
            return None
        try:
            matches = self._graph.get_node(q)
        except ClassificationError:
            logger.debug("Roadmap node outside of every graph node", config=q.tolist())
            return None
        for graph_node in self._graph.nodes():
            if graph_node in matches:
                return graph_node
        return next(iter(matches))

    def _connect_components(self, cc1: ConnectedComponent, cc2: ConnectedComponent) -> None:
        if cc1 is cc2:
            return
        if not cc2.can_reach(cc1):
            cc1.reachable_to.add(cc2)
            cc2.reachable_from.add(cc1)
            return
        on_cycle = cc2.descendants() & cc1.ancestors()
        # Largest component survives, oldest first on ties.
        target = min(on_cycle, key=lambda cc: (-len(cc), self._components.index(cc)))
        self._merge(target, on_cycle - {target})

    def _merge(self, target: ConnectedComponent, others: set[ConnectedComponent]) -> None:
        for component in others:
            for node in component.nodes:
                target.add_node(node)
            for reached in component.reachable_to:
                reached.reachable_from.discard(component)
                reached.reachable_from.add(target)
            for reaching in component.reachable_from:
                reaching.reachable_to.discard(component)
                reaching.reachable_to.add(target)
            target.reachable_to |= component.reachable_to
            target.reachable_from |= component.reachable_from
            self._components.remove(component)

        merged = others | {target}
        target.reachable_to -= merged
        target.reachable_from -= merged
        logger.debug(
            "Merged connected components",
            merged=len(merged),
            nodes=len(target),
            components=len(self._components),
        )


def _key(q: Configuration) -> tuple[float, ...]:
    return tuple(float(v) for v in np.asarray(q).ravel())
