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
Graph-Guided Path Validation

Wraps a collision-based PathValidation so that the valid part of a path
always stays within the semantics of a single transition-graph edge.

## Protocol

For a leaf path the base validator is called first. When it truncates the
path, the endpoints of the original and of the truncated path are classified
into graph nodes:

- same (origin, destination) classification: the truncated path is returned;
- a configuration outside every graph node: the path is invalid from its
  start and a zero-length path at the original start time is returned;
- different classification: the candidate edges between the truncated
  path's origin and destination nodes are tried from the back of the list.
  The first one whose path constraint, offset at the truncated start, is
  also satisfied at the truncated end is attached to the truncated path,
  which is validated once more. If none fits, a zero-length path is returned.

Path vectors are validated sub-path by sub-path, stopping at the first one
that is not fully valid.

Reverse validation mirrors all of this from the end of the path. It is a
less exercised mode: the zero-length fallback is anchored at the end time
and the result is a suffix of the input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from manip_planner.paths.path_vector import PathVector
from manip_planner.spec.errors import ClassificationError
from manip_planner.utils.logging_config import setup_logger

if TYPE_CHECKING:
    from manip_planner.paths.path import Path
    from manip_planner.spec.protocols import PathValidation, TransitionGraphSpec

logger = setup_logger()


class GraphPathValidation:
    """PathValidation enforcing consistency with the transition graph."""

    def __init__(self, path_validation: PathValidation, graph: TransitionGraphSpec):
        self._path_validation = path_validation
        self._graph = graph

    @property
    def base_validation(self) -> PathValidation:
        return self._path_validation

    @property
    def graph(self) -> TransitionGraphSpec:
        return self._graph

    def validate(self, path: Path, reverse: bool = False) -> tuple[bool, Path]:
        """Return (is_fully_valid, valid_part). `valid_part` is never None."""
        if path is None:
            raise ValueError("Cannot validate a null path")
        return self._validate(path, reverse, recover=True)

    def _validate(self, path: Path, reverse: bool, recover: bool) -> tuple[bool, Path]:
        if isinstance(path, PathVector):
            return self._validate_vector(path, reverse, recover)
        return self._validate_leaf(path, reverse, recover)

    def _validate_vector(
        self, path: PathVector, reverse: bool, recover: bool
    ) -> tuple[bool, Path]:
        ranks = range(path.number_paths())
        if reverse:
            ranks = reversed(ranks)

        for rank in ranks:
            valid, valid_sub_part = self._validate(path.path_at_rank(rank), reverse, recover)
            if valid:
                continue
            if reverse:
                kept = [valid_sub_part] + path.paths[rank + 1 :]
                start_time = path.time_range[1] - sum(p.length() for p in kept)
            else:
                kept = path.paths[:rank] + [valid_sub_part]
                start_time = path.time_range[0]
            return False, PathVector(path.output_size, kept, start_time=start_time)

        return True, path

    def _validate_leaf(self, path: Path, reverse: bool, recover: bool) -> tuple[bool, Path]:
        valid, truncated = self._path_validation.validate(path, reverse)
        if valid:
            return True, path

        old_t0, old_t1 = path.time_range
        new_t0, new_t1 = truncated.time_range
        anchor = old_t1 if reverse else old_t0
        invalid_from_start = path.extract(anchor, anchor)

        try:
            orig_nodes = self._graph.get_node(truncated(new_t0))
            dest_nodes = self._graph.get_node(truncated(new_t1))
            same_transition = orig_nodes == self._graph.get_node(
                path(old_t0)
            ) and dest_nodes == self._graph.get_node(path(old_t1))
            if same_transition:
                return False, truncated
        except ClassificationError as e:
            # Typically the path could not be projected: consider it invalid.
            logger.debug("Path endpoint not in any graph node", error=str(e))
            return False, invalid_from_start

        if not recover:
            return False, invalid_from_start

        # The truncated path does not belong to the same transition anymore.
        q_start, q_end = truncated(new_t0), truncated(new_t1)
        candidates = list(self._graph.edges_between(orig_nodes, dest_nodes))
        while candidates:
            edge = candidates.pop()
            constraints = self._graph.path_constraint(edge)
            constraints.offset_from_config(q_start)
            assert constraints.is_satisfied(q_start), "offset constraint must hold at its origin"
            if constraints.is_satisfied(q_end):
                logger.debug("Revalidating truncated path along edge", edge=edge.name)
                constrained = truncated.with_constraints(constraints)
                _, valid_part = self._validate(constrained, reverse, recover=False)
                return False, valid_part

        return False, invalid_from_start
