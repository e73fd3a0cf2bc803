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

"""Discretized collision checking of paths, implementing PathValidation."""

from __future__ import annotations

from collections.abc import Callable
import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from manip_planner.paths.path import Path
    from manip_planner.spec.types import Configuration

ConfigValidityFn = Callable[["Configuration"], bool]


class DiscretizedCollisionValidation:
    """Checks configurations along a path every `step` units of time.

    The collision engine is abstracted as `is_config_valid(q) -> bool`.
    Evaluating a constrained path may raise ProjectionError, which is left to
    the caller.
    """

    def __init__(self, is_config_valid: ConfigValidityFn, step: float = 0.05):
        if step <= 0:
            raise ValueError(f"Validation step must be positive, got {step}")
        self._is_config_valid = is_config_valid
        self._step = step

    @property
    def step(self) -> float:
        return self._step

    def validate(self, path: Path, reverse: bool = False) -> tuple[bool, Path]:
        """Return (is_fully_valid, valid_part).

        Forward mode keeps the prefix up to the last valid sample; reverse mode
        keeps the suffix from the last valid sample (walking backwards).
        """
        t0, t1 = path.time_range
        n_steps = max(1, math.ceil((t1 - t0) / self._step))
        times = np.linspace(t0, t1, n_steps + 1)
        if reverse:
            times = times[::-1]

        last_valid: float | None = None
        for t in times:
            if not self._is_config_valid(path(float(t))):
                break
            last_valid = float(t)
        else:
            return True, path

        if reverse:
            anchor = t1 if last_valid is None else last_valid
            return False, path.extract(anchor, t1)
        anchor = t0 if last_valid is None else last_valid
        return False, path.extract(t0, anchor)
