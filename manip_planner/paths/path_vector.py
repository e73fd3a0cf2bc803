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

"""Concatenation of paths in time order."""

from __future__ import annotations

from typing import TYPE_CHECKING

from manip_planner.paths.path import TIME_EPSILON, Path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from manip_planner.spec.protocols import PathConstraint
    from manip_planner.spec.types import Configuration


class PathVector(Path):
    """Sequence of sub-paths traversed one after the other.

    The vector's time range starts at `start_time` and lasts the sum of the
    sub-path lengths. Each sub-path keeps its own time range; global times are
    mapped onto it by offset.
    """

    def __init__(
        self,
        output_size: int,
        paths: Iterable[Path] = (),
        start_time: float = 0.0,
        constraints: PathConstraint | None = None,
    ) -> None:
        self._output_size = output_size
        self._paths: list[Path] = []
        super().__init__((start_time, start_time), constraints)
        for path in paths:
            self.append_path(path)

    @property
    def output_size(self) -> int:
        return self._output_size

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def number_paths(self) -> int:
        return len(self._paths)

    def path_at_rank(self, rank: int) -> Path:
        return self._paths[rank]

    def append_path(self, path: Path) -> None:
        if path.output_size != self._output_size:
            raise ValueError(
                f"Cannot append path of size {path.output_size} to vector of size "
                f"{self._output_size}"
            )
        self._paths.append(path)
        t0, t1 = self._time_range
        self._time_range = (t0, t1 + path.length())

    def copy(self) -> Path:
        return PathVector(
            self._output_size, self._paths, self._time_range[0], self.constraints
        )

    def _locate(self, t: float) -> tuple[int, float]:
        """Rank of the sub-path containing global time t and the local time on it."""
        if not self._paths:
            raise ValueError("Cannot evaluate an empty path vector")
        offset = self._time_range[0]
        for rank, path in enumerate(self._paths):
            length = path.length()
            if t <= offset + length + TIME_EPSILON or rank == len(self._paths) - 1:
                local = path.time_range[0] + min(max(t - offset, 0.0), length)
                return rank, local
            offset += length
        raise AssertionError("unreachable")

    def _evaluate(self, t: float) -> Configuration:
        rank, local = self._locate(t)
        return self._paths[rank](local)

    def _sub_path(self, t_a: float, t_b: float) -> Path:
        lo, hi = min(t_a, t_b), max(t_a, t_b)
        pieces: list[Path] = []
        offset = self._time_range[0]
        for path in self._paths:
            length = path.length()
            start, stop = max(lo, offset), min(hi, offset + length)
            if stop - start > TIME_EPSILON:
                p0 = path.time_range[0]
                pieces.append(path.extract(p0 + start - offset, p0 + stop - offset))
            offset += length

        if not pieces:
            # Zero-length extraction still has to evaluate to a configuration.
            rank, local = self._locate(lo)
            pieces.append(self._paths[rank].extract(local, local))

        if t_a > t_b:
            pieces = [piece.reverse() for piece in reversed(pieces)]
        return PathVector(self._output_size, pieces, start_time=lo)
