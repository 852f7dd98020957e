"""Planner configuration loaded from environment variables or defaults."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlannerSettings(BaseSettings):
    """Runtime knobs for the multi-goal route planner."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTEOPT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    finder: Literal["astar", "bfs"] = Field(
        default="astar",
        description="Grid shortest-path finder used for every leg.",
    )
    strategy: Literal["exhaustive", "end_insertion"] = Field(
        default="exhaustive",
        description="Visiting-order enumeration. 'end_insertion' only explores 2**k orders.",
    )
    max_goals: int = Field(
        default=9,
        ge=0,
        description="Refuse to plan above this many goals (k! orders). 0 disables the ceiling.",
    )
    leg_workers: int = Field(default=1, ge=1, description="Threads for pairwise leg searches.")
    order_workers: int = Field(default=1, ge=1, description="Threads for route evaluation.")
    return_to_start: bool = Field(
        default=False,
        description="Close every route with a final leg back to the start cell.",
    )


settings = PlannerSettings()
