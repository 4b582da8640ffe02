"""
Project model — one entry of the remote project listing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class Project(BaseModel):
    """A Rancher project as returned by ``/v3/projects``."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    description: str = ""

    @field_validator("name", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    def matches_prefix(self, prefix: str) -> bool:
        """True if the description starts with ``prefix`` (empty matches all)."""
        return self.description.startswith(prefix)
