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

"""Shared fixtures: small transition graphs over 2-D configurations."""

from __future__ import annotations

import pytest

from manip_planner.constraints import ConstraintSet, LinearConstraint
from manip_planner.graph import TransitionGraph
from manip_planner.paths import StraightSteeringMethod
from manip_planner.problem import Problem
from manip_planner.roadmap import Roadmap
from manip_planner.sampling import UniformConfigurationSampler
from manip_planner.utils.testing import always_valid
from manip_planner.validation import DiscretizedCollisionValidation, GraphPathValidation


@pytest.fixture
def free_graph():
    """Single mode with one unconstrained self-loop edge."""
    graph = TransitionGraph("free", seed=0)
    free = graph.create_node("free")
    graph.create_edge(free, free, "move")
    return graph


@pytest.fixture
def pick_graph():
    """Robot position r and object position o, q = (r, o).

    - grasp: r == o (the robot holds the object)
    - free: anything

    Moves in free keep the object in place; moves in grasp keep r == o.
    """
    graph = TransitionGraph("pick", seed=0)
    grasp = graph.create_node(
        "grasp", ConstraintSet([LinearConstraint("grasp", [[1.0, -1.0]])], name="grasp")
    )
    free = graph.create_node("free")

    def object_locked():
        return ConstraintSet(
            [LinearConstraint.locked_joints("object", [1], 2, parametric=True)],
            name="object-locked",
        )

    graph.create_edge(free, free, "transit", path_constraints=object_locked())
    graph.create_edge(free, grasp, "approach", path_constraints=object_locked())
    graph.create_edge(
        grasp,
        grasp,
        "transfer",
        path_constraints=ConstraintSet([LinearConstraint("grasp", [[1.0, -1.0]])]),
    )
    graph.create_edge(grasp, free, "release", path_constraints=object_locked())
    return graph


@pytest.fixture
def free_problem(free_graph):
    """Unconstrained problem in [-5, 5]^2 without obstacles."""
    sampler = UniformConfigurationSampler([-5.0, -5.0], [5.0, 5.0], seed=1)
    validation = DiscretizedCollisionValidation(always_valid, step=0.1)
    return Problem(
        graph=free_graph,
        sampler=sampler,
        steering_method=StraightSteeringMethod(),
        path_validation=GraphPathValidation(validation, free_graph),
    )


@pytest.fixture
def free_roadmap(free_graph):
    return Roadmap(free_graph)
