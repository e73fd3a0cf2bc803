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

"""Uniform configuration sampler implementing ConfigurationSampler."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from manip_planner.spec.types import Configuration


class UniformConfigurationSampler:
    """Draws configurations uniformly inside joint bounds."""

    def __init__(
        self,
        lower: ArrayLike,
        upper: ArrayLike,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ):
        self._lower = np.asarray(lower, dtype=np.float64)
        self._upper = np.asarray(upper, dtype=np.float64)
        if self._lower.shape != self._upper.shape:
            raise ValueError("Lower and upper bounds must have the same shape")
        if np.any(self._lower > self._upper):
            raise ValueError("Lower bounds must not exceed upper bounds")
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    @property
    def dimension(self) -> int:
        return int(self._lower.shape[0])

    def shoot(self) -> Configuration:
        return self._rng.uniform(self._lower, self._upper)
