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
Transition Graph Module

Discrete graph of manipulation modes used to guide roadmap extension.

- GraphNode: a mode, i.e. the configurations satisfying a constraint set
- GraphEdge: a transition, carrying path constraints and a steering method
- NodeSelector: ordered node list used for classification
- TransitionGraph: owns nodes and edges, classifies configurations and
  chooses extension edges
"""

from manip_planner.graph.graph_edge import GraphEdge
from manip_planner.graph.graph_node import GraphNode, NodeSelector
from manip_planner.graph.transition_graph import TransitionGraph

__all__ = ["GraphEdge", "GraphNode", "NodeSelector", "TransitionGraph"]
