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

Sampling-based roadmap planner for systems whose motions are organised by a
transition graph of manipulation modes ("free", "grasping", ...).

## Architecture

- TransitionGraph: modes (GraphNode) and transitions (GraphEdge) with their
  constraints and steering methods
- Roadmap: validated configurations, grouped into connected components
- GraphPathValidation: collision validation kept consistent with the graph
- ManipulationPlanner: grows the roadmap one sample at a time, keeping
  per-edge success statistics

## Factory Functions

```python
from manip_planner import create_planner, create_problem

problem = create_problem(graph, sampler, is_config_valid=collision_free)
planner = create_planner(name="manipulation", problem=problem)
result = planner.solve(q_init, [q_goal])
```

Settings are read from ``MANIP_PLANNER_*`` environment variables through
PlannerSettings.
"""

from manip_planner.config import PlannerSettings
from manip_planner.factory import create_planner, create_problem
from manip_planner.graph import GraphEdge, GraphNode, NodeSelector, TransitionGraph
from manip_planner.planners import ManipulationPlanner, SuccessStatistics
from manip_planner.problem import Problem
from manip_planner.roadmap import Roadmap
from manip_planner.spec import (
    ClassificationError,
    FailureReason,
    ManipPlannerError,
    PlannerConstructionError,
    PlanningResult,
    PlanningStatus,
    ProjectionError,
)

__all__ = [
    "ClassificationError",
    "FailureReason",
    "GraphEdge",
    "GraphNode",
    "ManipPlannerError",
    "ManipulationPlanner",
    "NodeSelector",
    "PlannerConstructionError",
    "PlannerSettings",
    "PlanningResult",
    "PlanningStatus",
    "Problem",
    "ProjectionError",
    "Roadmap",
    "SuccessStatistics",
    "TransitionGraph",
    "create_planner",
    "create_problem",
]
