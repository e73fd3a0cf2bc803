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

"""Manipulation planning problem: the collaborators the planner drives."""

from __future__ import annotations

from dataclasses import dataclass

from manip_planner.spec.errors import PlannerConstructionError
from manip_planner.spec.protocols import (
    ConfigurationSampler,
    PathProjector,
    SteeringMethod,
    TransitionGraphSpec,
)
from manip_planner.validation.graph_path_validation import GraphPathValidation


@dataclass
class Problem:
    """Bundle of the collaborators of a ManipulationPlanner.

    Attributes:
        graph: Transition graph guiding the extensions
        sampler: Random configuration generator
        steering_method: Direct steering method used for shortcut connections
        path_validation: Graph-guided validator (wrapping a collision validator)
        path_projector: Optional projector applied to every built path

    Raises:
        PlannerConstructionError: if a collaborator does not implement its
            protocol or the validator is not graph-guided.
    """

    graph: TransitionGraphSpec
    sampler: ConfigurationSampler
    steering_method: SteeringMethod
    path_validation: GraphPathValidation
    path_projector: PathProjector | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.path_validation, GraphPathValidation):
            raise PlannerConstructionError(
                "The path validation must be a GraphPathValidation, "
                f"got {type(self.path_validation).__name__}"
            )
        if self.path_validation.graph is not self.graph:
            raise PlannerConstructionError(
                "The path validation must use the problem's transition graph"
            )
        checks = (
            ("graph", self.graph, TransitionGraphSpec),
            ("sampler", self.sampler, ConfigurationSampler),
            ("steering_method", self.steering_method, SteeringMethod),
        )
        for name, value, protocol in checks:
            if not isinstance(value, protocol):
                raise PlannerConstructionError(
                    f"'{name}' must implement {protocol.__name__}, got {type(value).__name__}"
                )
        if self.path_projector is not None and not isinstance(self.path_projector, PathProjector):
            raise PlannerConstructionError(
                f"'path_projector' must implement PathProjector, "
                f"got {type(self.path_projector).__name__}"
            )
