"""Checklist parsing and generation.

Key components:
- ChecklistParser: extracts items from prompt markdown sections
- BasicChecklistGenerator: intent/keyword fallback when no section exists
- ChecklistStore: YAML persistence of resolved checklists
"""
from __future__ import annotations

from checkpilot.checklist.generator import BasicChecklistGenerator, PromptIntent
from checkpilot.checklist.models import (
    ChecklistItem,
    ChecklistSummary,
    ItemCategory,
    ParsedChecklist,
    VerificationType,
)
from checkpilot.checklist.parser import ChecklistParser
from checkpilot.checklist.store import ChecklistStore

__all__ = [
    "BasicChecklistGenerator",
    "ChecklistItem",
    "ChecklistParser",
    "ChecklistStore",
    "ChecklistSummary",
    "ItemCategory",
    "ParsedChecklist",
    "PromptIntent",
    "VerificationType",
]
