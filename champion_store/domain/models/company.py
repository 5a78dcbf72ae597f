"""
Company domain model.

A company only scopes customers, stores and orders, and is the subject
of the eligibility check.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CompanyDomain:
    """Domain model representing a company."""

    id: str
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert company to dictionary for persistence."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompanyDomain":
        """Create company from dictionary."""
        return cls(id=str(data["id"]), name=data.get("name") or "")
