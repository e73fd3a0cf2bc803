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

"""Manipulation Planning Specifications."""

from manip_planner.spec.enums import FailureReason, PlanningStatus
from manip_planner.spec.errors import (
    ClassificationError,
    ManipPlannerError,
    PlannerConstructionError,
    ProjectionError,
)
from manip_planner.spec.protocols import (
    ConfigurationSampler,
    GraphEdgeSpec,
    PathConstraint,
    PathProjector,
    PathValidation,
    SteeringMethod,
    TransitionGraphSpec,
)
from manip_planner.spec.types import Configuration, EdgeId, PlanningResult, TimeInterval

__all__ = [
    "ClassificationError",
    "Configuration",
    "ConfigurationSampler",
    "EdgeId",
    "FailureReason",
    "GraphEdgeSpec",
    "ManipPlannerError",
    "PathConstraint",
    "PathProjector",
    "PathValidation",
    "PlannerConstructionError",
    "PlanningResult",
    "PlanningStatus",
    "ProjectionError",
    "SteeringMethod",
    "TimeInterval",
    "TransitionGraphSpec",
]
