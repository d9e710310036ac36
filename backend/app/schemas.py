from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator

MAX_DIMENSION = 100

Count = Annotated[int, Field(ge=0)]


class ArrangementRequest(BaseModel):
    rows: int = Field(gt=0, le=MAX_DIMENSION)
    cols: int = Field(gt=0, le=MAX_DIMENSION)
    counts: dict[str, Count] = Field(min_length=1)
    seed: Optional[int] = None
    attempt_limit: Optional[int] = Field(default=None, gt=0, le=1_000_000)
    max_retries: Optional[int] = Field(default=None, ge=0, le=50)

    @field_validator("counts")
    @classmethod
    def _department_names(cls, v: dict[str, int]) -> dict[str, int]:
        out: dict[str, int] = {}
        for name, n in v.items():
            key = name.strip()
            if not key:
                raise ValueError("department names must be non-empty")
            out[key] = out.get(key, 0) + n
        return out


class SeatOut(BaseModel):
    category: str
    label: str


class ArrangementResponse(BaseModel):
    rows: int
    cols: int
    counts: dict[str, int]
    seats: list[list[SeatOut]]


class DefaultsResponse(BaseModel):
    rows: int
    cols: int
    counts: dict[str, int]
    attempt_limit: int
    max_retries: int
