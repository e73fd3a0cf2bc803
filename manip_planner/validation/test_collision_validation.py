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

import numpy as np
import pytest

from manip_planner.paths import StraightPath
from manip_planner.utils.testing import always_valid, wall_at
from manip_planner.validation import DiscretizedCollisionValidation


class TestDiscretizedCollisionValidation:
    def test_fully_valid(self):
        path = StraightPath([0.0, 0.0], [2.0, 0.0])
        valid, valid_part = DiscretizedCollisionValidation(always_valid, step=0.1).validate(path)
        assert valid
        assert valid_part is path

    def test_forward_truncation(self):
        path = StraightPath([0.0, 0.0], [2.0, 0.0])
        valid, valid_part = DiscretizedCollisionValidation(wall_at(1.05), step=0.1).validate(path)
        assert not valid
        assert valid_part.time_range[0] == 0.0
        assert valid_part.time_range[1] == pytest.approx(1.0)
        np.testing.assert_allclose(valid_part.end(), [1.0, 0.0])

    def test_invalid_at_start(self):
        path = StraightPath([0.0, 0.0], [2.0, 0.0], time_range=(1.0, 3.0))
        valid, valid_part = DiscretizedCollisionValidation(wall_at(-1.0), step=0.1).validate(path)
        assert not valid
        assert valid_part.time_range == (1.0, 1.0)

    def test_reverse_truncation(self):
        path = StraightPath([2.0, 0.0], [0.0, 0.0])
        validation = DiscretizedCollisionValidation(wall_at(1.05), step=0.1)
        valid, valid_part = validation.validate(path, reverse=True)
        assert not valid
        assert valid_part.time_range[0] == pytest.approx(1.0)
        assert valid_part.time_range[1] == 2.0
        np.testing.assert_allclose(valid_part.initial(), [1.0, 0.0])
        np.testing.assert_allclose(valid_part.end(), [0.0, 0.0])

    def test_zero_length_path(self):
        path = StraightPath([0.0, 0.0], [0.0, 0.0])
        valid, _ = DiscretizedCollisionValidation(always_valid).validate(path)
        assert valid

    def test_non_positive_step(self):
        with pytest.raises(ValueError):
            DiscretizedCollisionValidation(always_valid, step=0.0)
