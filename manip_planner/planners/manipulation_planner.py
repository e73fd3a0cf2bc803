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
Manipulation Planner

Incremental roadmap planner guided by a transition graph. Each call to
``one_step`` samples a configuration, extends every connected component of
the roadmap toward it along an edge chosen by the transition graph, then
tries to stitch the new nodes to each other and to the rest of the roadmap
with direct shortcut paths.

Every extension attempt along a graph edge records exactly one outcome in
that edge's SuccessStatistics:

- a hard failure records its FailureReason and produces no path;
- a full extension records a success;
- a path cut short by the projector records PATH_PROJECTION_SHORTENED;
- a path cut short by validation records PATH_VALIDATION_SHORTENED;
- a path cut short by both records PARTIALLY_EXTENDED.
"""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import TYPE_CHECKING

import numpy as np

from manip_planner.config import PlannerSettings
from manip_planner.planners.statistics import EdgeStatisticsTable, SuccessStatistics
from manip_planner.problem import Problem
from manip_planner.roadmap.roadmap import Roadmap
from manip_planner.spec.enums import FailureReason, PlanningStatus
from manip_planner.spec.errors import (
    ClassificationError,
    PlannerConstructionError,
    ProjectionError,
)
from manip_planner.spec.types import PlanningResult
from manip_planner.utils.logging_config import setup_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from manip_planner.paths.path import Path
    from manip_planner.roadmap.roadmap_node import RoadmapNode
    from manip_planner.spec.protocols import GraphEdgeSpec
    from manip_planner.spec.types import Configuration

logger = setup_logger()

# Reasons reported by get_edge_stat, after the success count.
REPORTED_REASONS: tuple[FailureReason, ...] = tuple(FailureReason)[:6]


@dataclass
class DelayedEdge:
    """Extension whose end configuration was already reached in the same step."""

    near: RoadmapNode
    q_new: Configuration
    path: Path


class ManipulationPlanner:
    """Roadmap planner whose extensions follow transition-graph edges."""

    def __init__(
        self,
        problem: Problem,
        roadmap: Roadmap,
        extend_step: float = 1.0,
        connect_k: int = 7,
        settings: PlannerSettings | None = None,
    ):
        if not isinstance(problem, Problem):
            raise PlannerConstructionError(
                f"The problem must be a Problem, got {type(problem).__name__}"
            )
        if not isinstance(roadmap, Roadmap):
            raise PlannerConstructionError(
                f"The roadmap must be a Roadmap, got {type(roadmap).__name__}"
            )
        if roadmap.graph is not problem.graph:
            raise PlannerConstructionError(
                "The roadmap must classify nodes with the problem's transition graph"
            )
        if not 0.0 < extend_step <= 1.0:
            raise PlannerConstructionError(f"extend_step must be in (0, 1], got {extend_step}")
        if connect_k < 1:
            raise PlannerConstructionError(f"connect_k must be positive, got {connect_k}")

        self._problem = problem
        self._roadmap = roadmap
        self._extend_step = extend_step
        self._connect_k = connect_k
        self._settings = settings or PlannerSettings()
        self._statistics = EdgeStatisticsTable()

    @property
    def problem(self) -> Problem:
        return self._problem

    @property
    def roadmap(self) -> Roadmap:
        return self._roadmap

    @property
    def extend_step(self) -> float:
        return self._extend_step

    # =========================================================================
    # Driver
    # =========================================================================

    def start_solve(self, q_init: Configuration, q_goals: Iterable[Configuration]) -> None:
        """Insert the init and goal configurations in the roadmap."""
        self._roadmap.set_init_node(q_init)
        self._roadmap.reset_goal_nodes()
        for q_goal in q_goals:
            self._roadmap.add_goal_node(q_goal)

    def solve(
        self,
        q_init: Configuration,
        q_goals: Sequence[Configuration],
        max_iterations: int | None = None,
        timeout: float | None = None,
    ) -> PlanningResult:
        """Grow the roadmap until the init node reaches a goal node.

        The iteration and time budgets default to the planner settings.
        """
        start_time = time.time()
        if max_iterations is None:
            max_iterations = self._settings.max_iterations
        if timeout is None:
            timeout = self._settings.timeout

        if len(q_goals) == 0:
            return _create_failure_result(PlanningStatus.INVALID_GOAL, "No goal configuration")

        self.start_solve(q_init, q_goals)
        error = self._validate_query()
        if error is not None:
            return error

        for iteration in range(max_iterations):
            if self._roadmap.path_exists():
                return self._solution(time.time() - start_time, iteration)
            if time.time() - start_time > timeout:
                return _create_failure_result(
                    PlanningStatus.TIMEOUT,
                    f"Timeout after {iteration} iterations",
                    time.time() - start_time,
                    iteration,
                )
            self.one_step()

        if self._roadmap.path_exists():
            return self._solution(time.time() - start_time, max_iterations)

        logger.info(
            "No solution found",
            iterations=max_iterations,
            nodes=len(self._roadmap.nodes),
            components=len(self._roadmap.connected_components),
        )
        return _create_failure_result(
            PlanningStatus.NO_SOLUTION,
            f"No path found after {max_iterations} iterations",
            time.time() - start_time,
            max_iterations,
        )

    def _validate_query(self) -> PlanningResult | None:
        """Return an error result if init or goals lie outside every graph node."""
        if self._roadmap.init_node.graph_node is None:
            return _create_failure_result(
                PlanningStatus.INVALID_START,
                "Start configuration does not belong to any graph node",
            )
        for goal in self._roadmap.goal_nodes:
            if goal.graph_node is None:
                return _create_failure_result(
                    PlanningStatus.INVALID_GOAL,
                    f"Goal configuration {goal.configuration.tolist()} "
                    "does not belong to any graph node",
                )
        return None

    def _solution(self, planning_time: float, iterations: int) -> PlanningResult:
        nodes = self._roadmap.shortest_path()
        path = self._roadmap.path_along(nodes)
        logger.info(
            "Solution found",
            iterations=iterations,
            waypoints=len(nodes),
            nodes=len(self._roadmap.nodes),
        )
        return _create_success_result(nodes, path, planning_time, iterations)

    # =========================================================================
    # Roadmap growth
    # =========================================================================

    def one_step(self) -> None:
        """Sample once and extend every connected component toward the sample."""
        graph_nodes = self._problem.graph.nodes()
        new_nodes: list[RoadmapNode] = []
        delayed_edges: list[DelayedEdge] = []

        q_rand = self._problem.sampler.shoot()

        for component in self._roadmap.connected_components:
            if not self._roadmap.has_component(component):
                continue
            for graph_node in graph_nodes:
                near, _ = self._roadmap.nearest_node(q_rand, component, graph_node)
                if near is None:
                    continue
                path = self.extend(near, q_rand)
                if path is None:
                    continue
                q_new = path.end()
                if _belongs(q_new, new_nodes):
                    delayed_edges.append(DelayedEdge(near, q_new, path))
                else:
                    new_nodes.append(self._roadmap.add_node_and_edges(near, q_new, path))

        for delayed in delayed_edges:
            node = self._roadmap.add_node(delayed.q_new)
            self._roadmap.add_edge(delayed.near, node, delayed.path)
            self._roadmap.add_edge(node, delayed.near, delayed.path.reverse())

        nb_connections = self.try_connect_new_nodes(new_nodes)
        if nb_connections == 0:
            nb_connections = self.try_connect_to_roadmap(new_nodes)

        logger.debug(
            "Roadmap step",
            new_nodes=len(new_nodes),
            delayed_edges=len(delayed_edges),
            connections=nb_connections,
            components=len(self._roadmap.connected_components),
        )

    def extend(self, near: RoadmapNode, q_rand: Configuration) -> Path | None:
        """Extend `near` toward q_rand along an edge chosen by the graph.

        Returns:
            A validated path of positive length starting at `near`, or None.
        """
        edge = self._problem.graph.choose_edge(near)
        if edge is None:
            return None
        stats = self._statistics.stat_for(edge)

        q_proj = np.array(q_rand, dtype=np.float64)
        if not edge.apply_constraints(near.configuration, q_proj):
            return _fail(stats, edge, FailureReason.PROJECTION_FAILED)

        path = edge.build(near.configuration, q_proj)
        if path is None:
            return _fail(stats, edge, FailureReason.STEERING_METHOD_FAILED)

        proj_shorter = False
        projector = self._problem.path_projector
        if projector is not None:
            projected = projector.apply(path)
            if projected is None or projected.length() <= 0.0:
                return _fail(stats, edge, FailureReason.PATH_PROJECTION_ZERO_LENGTH)
            proj_shorter = projected.length() < path.length()
            path = projected

        try:
            fully_valid, valid_path = self._problem.path_validation.validate(path)
        except (ClassificationError, ProjectionError) as e:
            logger.debug("Validation error during extension", edge=edge.name, error=str(e))
            return _fail(stats, edge, FailureReason.PATH_VALIDATION_ZERO_LENGTH)
        if valid_path.length() <= 0.0:
            return _fail(stats, edge, FailureReason.PATH_VALIDATION_ZERO_LENGTH)

        if not fully_valid and self._extend_step < 1.0:
            t0, _ = valid_path.time_range
            try:
                valid_path = valid_path.extract(t0, t0 + valid_path.length() * self._extend_step)
                valid_path.end()
            except ProjectionError as e:
                logger.debug("Could not extract extension step", edge=edge.name, error=str(e))
                return _fail(stats, edge, FailureReason.PATH_PROJECTION_SHORTENED)

        if fully_valid and not proj_shorter:
            stats.add_success()
        elif fully_valid:
            stats.add_failure(FailureReason.PATH_PROJECTION_SHORTENED)
        elif not proj_shorter:
            stats.add_failure(FailureReason.PATH_VALIDATION_SHORTENED)
        else:
            stats.add_failure(FailureReason.PARTIALLY_EXTENDED)
        return valid_path

    def try_connect_new_nodes(self, nodes: Sequence[RoadmapNode]) -> int:
        """Connect pairs of `nodes` lying in different components."""
        nb_connections = 0
        for i, n1 in enumerate(nodes):
            for n2 in nodes[i + 1 :]:
                if n1.connected_component is n2.connected_component:
                    continue
                if self._try_connect(n1, n2):
                    nb_connections += 1
        logger.debug("Connected new nodes", connections=nb_connections)
        return nb_connections

    def try_connect_to_roadmap(self, nodes: Sequence[RoadmapNode]) -> int:
        """Connect each of `nodes` to its nearest neighbours in the other components.

        At most one connection is made per node.
        """
        nb_connections = 0
        for n1 in nodes:
            connected = False
            for component in self._roadmap.connected_components:
                if component is n1.connected_component:
                    continue
                neighbors = self._roadmap.k_nearest_search(
                    n1.configuration, component, self._connect_k
                )
                for n2 in neighbors:
                    if self._try_connect(n1, n2):
                        nb_connections += 1
                        connected = True
                        break
                if connected:
                    break
        logger.debug("Connected new nodes to roadmap", connections=nb_connections)
        return nb_connections

    def _try_connect(self, n1: RoadmapNode, n2: RoadmapNode) -> bool:
        """Link n1 and n2 by a direct shortcut in the directions still missing."""
        one_to_two = n1.is_out_neighbor(n2)
        two_to_one = n1.is_in_neighbor(n2)
        if one_to_two and two_to_one:
            return False

        path = self._problem.steering_method(n1.configuration, n2.configuration)
        if path is None:
            return False

        projector = self._problem.path_projector
        if projector is not None:
            projected = projector.apply(path)
            if projected is None or projected.length() < path.length():
                return False
            path = projected

        try:
            fully_valid, _ = self._problem.path_validation.validate(path)
        except (ClassificationError, ProjectionError) as e:
            logger.debug("Validation error during connection", error=str(e))
            return False
        if not fully_valid:
            return False

        if not one_to_two:
            self._roadmap.add_edge(n1, n2, path)
        if not two_to_one:
            self._roadmap.add_edge(n2, n1, path.reverse())
        return True

    # =========================================================================
    # Statistics
    # =========================================================================

    def edge_statistics(self, edge: GraphEdgeSpec) -> SuccessStatistics | None:
        return self._statistics.get(edge.id)

    def get_edge_stat(self, edge: GraphEdgeSpec) -> list[int]:
        """Success count followed by the count of each reported failure reason.

        PARTIALLY_EXTENDED is not reported, so attempts cut short by both the
        projector and validation do not show up here and the sum of the list
        can be lower than the number of attempts. Use edge_statistics for the
        full record.
        """
        record = self._statistics.get(edge.id)
        if record is None:
            return [0] * (len(REPORTED_REASONS) + 1)
        return [record.nb_success()] + [record.nb_failure(r) for r in REPORTED_REASONS]

    @staticmethod
    def error_list() -> list[str]:
        """Labels matching the entries of get_edge_stat."""
        return ["Success"] + [reason.label for reason in REPORTED_REASONS]

    def get_name(self) -> str:
        """Get planner name."""
        return "ManipulationPlanner"


def _belongs(q: Configuration, nodes: Iterable[RoadmapNode]) -> bool:
    return any(np.array_equal(node.configuration, q) for node in nodes)


def _fail(stats: SuccessStatistics, edge: GraphEdgeSpec, reason: FailureReason) -> None:
    stats.add_failure(reason)
    logger.debug("Extension failed", edge=edge.name, reason=reason.label)
    return None


# ============= Result Helpers =============


def _create_success_result(
    nodes: list[RoadmapNode],
    path: Path | None,
    planning_time: float,
    iterations: int,
) -> PlanningResult:
    """Create a successful planning result."""
    return PlanningResult(
        status=PlanningStatus.SUCCESS,
        waypoints=[node.configuration for node in nodes],
        path=path,
        planning_time=planning_time,
        path_length=path.length() if path is not None else 0.0,
        iterations=iterations,
        message="Path found",
    )


def _create_failure_result(
    status: PlanningStatus,
    message: str,
    planning_time: float = 0.0,
    iterations: int = 0,
) -> PlanningResult:
    """Create a failed planning result."""
    return PlanningResult(
        status=status,
        planning_time=planning_time,
        iterations=iterations,
        message=message,
    )
