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

"""Tests for the in-memory transition graph."""

from collections import Counter

import numpy as np
import pytest

from manip_planner.constraints import ConstraintSet, LinearConstraint
from manip_planner.graph import NodeSelector, TransitionGraph
from manip_planner.roadmap import RoadmapNode
from manip_planner.spec.errors import ClassificationError
from manip_planner.spec.protocols import GraphEdgeSpec, TransitionGraphSpec


def _modes(graph):
    return {node.name: node for node in graph.nodes()}


def _edges(graph):
    return {edge.name: edge for edge in graph.edges()}


class TestClassification:
    def test_implements_protocol(self, pick_graph):
        assert isinstance(pick_graph, TransitionGraphSpec)
        assert all(isinstance(edge, GraphEdgeSpec) for edge in pick_graph.edges())

    def test_get_node_returns_all_containing_nodes(self, pick_graph):
        modes = _modes(pick_graph)
        assert pick_graph.get_node(np.array([1.0, 1.0])) == {modes["grasp"], modes["free"]}
        assert pick_graph.get_node(np.array([1.0, 2.0])) == {modes["free"]}

    def test_unclassifiable_configuration(self):
        graph = TransitionGraph("grasp-only")
        graph.create_node("grasp", ConstraintSet([LinearConstraint("grasp", [[1.0, -1.0]])]))
        with pytest.raises(ClassificationError):
            graph.get_node(np.array([0.0, 1.0]))

    def test_node_selector_priority(self, pick_graph):
        modes = _modes(pick_graph)
        assert pick_graph.node_selector.get_node(np.array([2.0, 2.0])) is modes["grasp"]
        assert pick_graph.node_selector.get_node(np.array([2.0, 0.0])) is modes["free"]

    def test_empty_selector_raises(self):
        with pytest.raises(ClassificationError):
            NodeSelector().get_node(np.zeros(2))

    def test_offset_edge_constraint_implies_destination(self, pick_graph):
        approach = _edges(pick_graph)["approach"]
        q = np.array([-3.0, 4.0])
        assert approach.apply_constraints(np.array([0.0, 1.0]), q)
        assert approach.to_node in pick_graph.get_node(q)


class TestEdges:
    def test_ids_follow_creation_order(self, pick_graph):
        assert [edge.id for edge in pick_graph.edges()] == [0, 1, 2, 3]

    def test_edges_between(self, pick_graph):
        modes, edges = _modes(pick_graph), _edges(pick_graph)
        assert pick_graph.edges_between({modes["free"]}, {modes["grasp"]}) == [edges["approach"]]
        both = {modes["free"], modes["grasp"]}
        assert [e.name for e in pick_graph.edges_between(both, {modes["free"]})] == [
            "transit",
            "release",
        ]

    def test_path_constraint_is_fresh_copy(self, pick_graph):
        transit = _edges(pick_graph)["transit"]
        constraints = pick_graph.path_constraint(transit)
        constraints.offset_from_config(np.array([0.0, 5.0]))
        assert pick_graph.path_constraint(transit).is_satisfied(np.array([0.0, 0.0]))

    def test_apply_constraints_keeps_object(self, pick_graph):
        transit = _edges(pick_graph)["transit"]
        q = np.array([3.0, 2.0])
        assert transit.apply_constraints(np.array([0.0, 1.0]), q)
        np.testing.assert_allclose(q, [3.0, 1.0])

    def test_build_attaches_constraints(self, pick_graph):
        transit = _edges(pick_graph)["transit"]
        path = transit.build(np.array([0.0, 1.0]), np.array([2.0, 1.0]))
        assert path is not None
        assert path.constraints is not None
        np.testing.assert_allclose(path.end(), [2.0, 1.0])

    def test_build_rejects_target_off_leaf(self, pick_graph):
        transit = _edges(pick_graph)["transit"]
        assert transit.build(np.array([0.0, 1.0]), np.array([2.0, 2.0])) is None

    def test_negative_weight(self, pick_graph):
        free = _modes(pick_graph)["free"]
        with pytest.raises(ValueError):
            pick_graph.create_edge(free, free, "bad", weight=-1.0)


class TestChooseEdge:
    def test_unclassified_node(self, pick_graph):
        assert pick_graph.choose_edge(RoadmapNode(np.zeros(2))) is None

    def test_only_outgoing_edges(self, pick_graph):
        modes = _modes(pick_graph)
        node = RoadmapNode(np.array([1.0, 1.0]), graph_node=modes["grasp"])
        names = {pick_graph.choose_edge(node).name for _ in range(50)}
        assert names <= {"transfer", "release"}

    def test_zero_weight_never_chosen(self):
        graph = TransitionGraph(seed=3)
        free = graph.create_node("free")
        graph.create_edge(free, free, "never", weight=0.0)
        always = graph.create_edge(free, free, "always", weight=2.0)
        node = RoadmapNode(np.zeros(2), graph_node=free)
        assert Counter(graph.choose_edge(node) for _ in range(20)) == {always: 20}

    def test_no_positive_edge(self):
        graph = TransitionGraph()
        free = graph.create_node("free")
        graph.create_edge(free, free, "never", weight=0.0)
        assert graph.choose_edge(RoadmapNode(np.zeros(2), graph_node=free)) is None

    def test_seeded_choice_is_reproducible(self):
        def draws(seed):
            graph = TransitionGraph(seed=seed)
            free = graph.create_node("free")
            for name in "abcd":
                graph.create_edge(free, free, name)
            node = RoadmapNode(np.zeros(2), graph_node=free)
            return [graph.choose_edge(node).name for _ in range(10)]

        assert draws(7) == draws(7)
