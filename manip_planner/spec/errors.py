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

"""Exceptions raised by the manipulation planning stack."""


class ManipPlannerError(Exception):
    """Base class for all planner errors."""


class ClassificationError(ManipPlannerError):
    """A configuration does not belong to any transition-graph node."""


class ProjectionError(ManipPlannerError):
    """A configuration could not be projected onto a constraint manifold."""


class PlannerConstructionError(ManipPlannerError, TypeError):
    """A planner or problem was assembled from collaborators of the wrong type."""
