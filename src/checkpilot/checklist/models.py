"""Data models for verification checklists."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ItemCategory(str, Enum):
    """Which checklist section an item came from."""

    VALIDATION = "validation"
    EDGE_CASE = "edge-case"
    RISK = "risk"


class VerificationType(str, Enum):
    """How an item can be confirmed."""

    AUTOMATED = "automated"  # Machine-checkable via a hook
    SEMI_AUTOMATED = "semi-automated"  # Needs a human glance at output
    MANUAL = "manual"  # Requires human judgment


@dataclass(frozen=True, slots=True)
class ChecklistItem:
    """One verifiable statement."""

    id: str
    category: ItemCategory
    content: str
    verification_type: VerificationType
    group: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON/YAML serialization."""
        result: dict[str, Any] = {
            "id": self.id,
            "category": self.category.value,
            "content": self.content,
            "verification_type": self.verification_type.value,
        }
        if self.group is not None:
            result["group"] = self.group
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChecklistItem":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            category=ItemCategory(data["category"]),
            content=str(data["content"]),
            verification_type=VerificationType(data["verification_type"]),
            group=data.get("group"),
        )


@dataclass(slots=True)
class ParsedChecklist:
    """Checklist items grouped by section.

    ``total_items`` always equals the combined length of the three lists.
    """

    validation_items: list[ChecklistItem] = field(default_factory=list)
    edge_cases: list[ChecklistItem] = field(default_factory=list)
    risks: list[ChecklistItem] = field(default_factory=list)
    has_checklist: bool = False

    @property
    def total_items(self) -> int:
        return len(self.validation_items) + len(self.edge_cases) + len(self.risks)

    def all_items(self) -> list[ChecklistItem]:
        """Return validation, edge-case and risk items in that order."""
        return [*self.validation_items, *self.edge_cases, *self.risks]

    def to_dict(self) -> dict[str, Any]:
        return {
            "validation_items": [item.to_dict() for item in self.validation_items],
            "edge_cases": [item.to_dict() for item in self.edge_cases],
            "risks": [item.to_dict() for item in self.risks],
            "has_checklist": self.has_checklist,
            "total_items": self.total_items,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParsedChecklist":
        return cls(
            validation_items=[
                ChecklistItem.from_dict(item)
                for item in data.get("validation_items") or []
            ],
            edge_cases=[
                ChecklistItem.from_dict(item) for item in data.get("edge_cases") or []
            ],
            risks=[ChecklistItem.from_dict(item) for item in data.get("risks") or []],
            has_checklist=bool(data.get("has_checklist", False)),
        )


@dataclass(frozen=True, slots=True)
class ChecklistSummary:
    """Item counts per section and per verification type."""

    validation: int
    edge_cases: int
    risks: int
    automated: int
    semi_automated: int
    manual: int
