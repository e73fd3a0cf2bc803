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

"""Planner settings, overridable through ``MANIP_PLANNER_*`` environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlannerSettings(BaseSettings):
    extend_step: float = Field(default=1.0, gt=0.0, le=1.0)
    connect_k: int = Field(default=7, ge=1)
    validation_step: float = Field(default=0.05, gt=0.0)
    max_iterations: int = Field(default=1000, ge=1)
    timeout: float = Field(default=10.0, gt=0.0)
    seed: int | None = None

    model_config = SettingsConfigDict(
        env_prefix="MANIP_PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )
