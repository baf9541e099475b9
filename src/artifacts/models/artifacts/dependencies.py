"""Dependency models for resolved POM dependency blocks."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from contract.artifacts import FORGE, WILDCARD_VERSION


class Constraint(BaseModel):
    """A version range; pinned versions use the same value for both bounds."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    lower_bound: str | None = Field(alias="lowerBound")
    upper_bound: str | None = Field(alias="upperBound")

    @classmethod
    def pinned(cls, version: str | None) -> Constraint:
        return cls(lower_bound=version, upper_bound=version)

    @property
    def is_wildcard(self) -> bool:
        return self.lower_bound == WILDCARD_VERSION and self.upper_bound == WILDCARD_VERSION


class Dependency(BaseModel):
    """A dependency on another product, with at least one constraint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    forge: str = Field(default=FORGE)
    product: str
    constraints: list[Constraint] = Field(min_length=1)


# One entry per independently resolved POM dependency block.
DependencySet = list[list[Dependency]]


__all__ = ["Constraint", "Dependency", "DependencySet"]
