"""Strict schema baselines: unknown fields are rejected, not ignored."""

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Response DTO base."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class StrictRequestModel(StrictModel):
    """Request DTO base. Ids and codes arrive trimmed."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, str_strip_whitespace=True)
