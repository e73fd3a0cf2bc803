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

"""Factory functions for manipulation planning components."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from manip_planner.config import PlannerSettings
from manip_planner.paths.steering_method import StraightSteeringMethod
from manip_planner.problem import Problem
from manip_planner.sampling.uniform_sampler import UniformConfigurationSampler
from manip_planner.validation.collision_validation import DiscretizedCollisionValidation
from manip_planner.validation.graph_path_validation import GraphPathValidation

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from manip_planner.planners.manipulation_planner import ManipulationPlanner
    from manip_planner.spec.protocols import (
        ConfigurationSampler,
        PathProjector,
        PathValidation,
        SteeringMethod,
        TransitionGraphSpec,
    )
    from manip_planner.validation.collision_validation import ConfigValidityFn


def create_problem(
    graph: TransitionGraphSpec,
    sampler: ConfigurationSampler | None = None,
    is_config_valid: ConfigValidityFn | None = None,
    path_validation: PathValidation | None = None,
    steering_method: SteeringMethod | None = None,
    path_projector: PathProjector | None = None,
    bounds: tuple[ArrayLike, ArrayLike] | None = None,
    settings: PlannerSettings | None = None,
) -> Problem:
    """Create a Problem whose base validation is wrapped in a GraphPathValidation.

    Either a base `path_validation` or an `is_config_valid` predicate (checked
    every `settings.validation_step`) must be given. Without a sampler, a
    uniform sampler over `bounds` seeded with `settings.seed` is used.
    """
    settings = settings or PlannerSettings()
    if sampler is None:
        if bounds is None:
            raise ValueError("Either sampler or bounds must be given")
        sampler = UniformConfigurationSampler(*bounds, seed=settings.seed)
    if path_validation is None:
        if is_config_valid is None:
            raise ValueError("Either path_validation or is_config_valid must be given")
        path_validation = DiscretizedCollisionValidation(
            is_config_valid, step=settings.validation_step
        )
    return Problem(
        graph=graph,
        sampler=sampler,
        steering_method=steering_method or StraightSteeringMethod(),
        path_validation=GraphPathValidation(path_validation, graph),
        path_projector=path_projector,
    )


def create_planner(
    name: str = "manipulation",
    problem: Problem | None = None,
    settings: PlannerSettings | None = None,
    **kwargs: Any,
) -> ManipulationPlanner:
    """Create roadmap planner. name='manipulation'.

    A fresh Roadmap over the problem's graph is created unless one is passed
    in `kwargs`.
    """
    if name == "manipulation":
        from manip_planner.planners.manipulation_planner import ManipulationPlanner
        from manip_planner.roadmap.roadmap import Roadmap

        if problem is None:
            raise ValueError("A problem is required to create a planner")
        settings = settings or PlannerSettings()
        kwargs.setdefault("extend_step", settings.extend_step)
        kwargs.setdefault("connect_k", settings.connect_k)
        kwargs.setdefault("settings", settings)
        roadmap = kwargs.pop("roadmap", None)
        if roadmap is None:
            roadmap = Roadmap(problem.graph)
        return ManipulationPlanner(problem, roadmap, **kwargs)
    else:
        raise ValueError(f"Unknown planner: {name}. Available: ['manipulation']")
