"""Checklist extraction from generated prompt markdown.

Deep-mode prompt artifacts carry up to three checklist sections, each
under a ``##`` or ``###`` heading:

- ``Validation Checklist``: checkbox items, optionally grouped under bold
  ``**Label:**`` lines.
- ``Edge Cases to Consider``: bullets of the form ``* **Scenario**: detail``.
- ``What Could Go Wrong``: bullets of the form ``* **Risk**: detail``.

Parsing is tolerant: a missing section or an unexpected layout yields
fewer items, never an exception.
"""

from __future__ import annotations

import logging
import re

from checkpilot.checklist.models import (
    ChecklistItem,
    ChecklistSummary,
    ItemCategory,
    ParsedChecklist,
    VerificationType,
)

logger = logging.getLogger(__name__)


def _section_pattern(title: str) -> re.Pattern[str]:
    """Match a level-2/3 heading and capture its body up to the next one."""
    return re.compile(
        rf"^\#{{2,3}}(?!\#)[ \t]*{title}[^\n]*\n?(?P<body>.*?)(?=^\#{{2,3}}(?!\#)|\Z)",
        re.IGNORECASE | re.MULTILINE | re.DOTALL,
    )


VALIDATION_SECTION = _section_pattern(r"Validation\s+Checklist")
EDGE_CASE_SECTION = _section_pattern(r"Edge\s+Cases?\s+to\s+Consider")
RISK_SECTION = _section_pattern(r"What\s+Could\s+Go\s+Wrong")

_GROUP_LABEL = re.compile(r"^\s*\*\*(.+?):\*\*")
_CHECKBOX_ITEM = re.compile(r"^\s*(?:[☐□○●◯]|-\s*\[\s*\])\s*(.+)$")
_LABELED_BULLET = re.compile(r"^\s*[•\-*]\s*\*\*(.+?)\*\*:?\s*(.*)$")
_PLAIN_BULLET = re.compile(r"^\s*[•\-*]\s+([^*\n]+)$")

# Evaluated top to bottom; the first keyword found decides the type.
VERIFICATION_KEYWORDS: tuple[tuple[VerificationType, tuple[str, ...]], ...] = (
    (
        VerificationType.AUTOMATED,
        (
            "compiles",
            "builds",
            "tests pass",
            "all tests",
            "test coverage",
            "lint",
            "typecheck",
            "no errors",
            "exit code",
            "npm test",
            "npm run",
            "build succeeds",
            "build passes",
        ),
    ),
    (
        VerificationType.SEMI_AUTOMATED,
        (
            "renders",
            "displays",
            "console errors",
            "console warnings",
            "no warnings",
            "ui renders",
            "responsive",
            "screen sizes",
            "visual",
            "layout",
        ),
    ),
)


def _section_body(pattern: re.Pattern[str], content: str) -> str | None:
    match = pattern.search(content)
    if match is None:
        return None
    return match.group("body")


class ChecklistParser:
    """Parse checklist sections out of prompt markdown."""

    def parse(self, content: str) -> ParsedChecklist:
        """Parse all three checklist sections."""
        checklist = ParsedChecklist(
            validation_items=self.parse_validation_section(content),
            edge_cases=self.parse_edge_case_section(content),
            risks=self.parse_risk_section(content),
        )
        checklist.has_checklist = checklist.total_items > 0
        logger.debug(
            "Parsed checklist: %d validation, %d edge cases, %d risks",
            len(checklist.validation_items),
            len(checklist.edge_cases),
            len(checklist.risks),
        )
        return checklist

    def parse_validation_section(self, content: str) -> list[ChecklistItem]:
        """Parse checkbox items from the Validation Checklist section."""
        body = _section_body(VALIDATION_SECTION, content)
        if body is None:
            return []

        items: list[ChecklistItem] = []
        current_group: str | None = None

        for line in body.splitlines():
            group_match = _GROUP_LABEL.match(line)
            if group_match:
                current_group = group_match.group(1).strip()
                continue

            item_match = _CHECKBOX_ITEM.match(line)
            if not item_match:
                continue

            item_content = item_match.group(1).strip()
            if not item_content:
                continue
            items.append(
                ChecklistItem(
                    id=f"validation-{len(items) + 1}",
                    category=ItemCategory.VALIDATION,
                    content=item_content,
                    group=current_group,
                    verification_type=self.detect_verification_type(item_content),
                )
            )

        return items

    def parse_edge_case_section(self, content: str) -> list[ChecklistItem]:
        """Parse scenario bullets from the Edge Cases to Consider section."""
        body = _section_body(EDGE_CASE_SECTION, content)
        if body is None:
            return []
        return self._parse_bullets(
            body, ItemCategory.EDGE_CASE, "edge-case", detail_required=True
        )

    def parse_risk_section(self, content: str) -> list[ChecklistItem]:
        """Parse risk bullets from the What Could Go Wrong section."""
        body = _section_body(RISK_SECTION, content)
        if body is None:
            return []
        return self._parse_bullets(
            body, ItemCategory.RISK, "risk", detail_required=False
        )

    def _parse_bullets(
        self,
        body: str,
        category: ItemCategory,
        id_prefix: str,
        *,
        detail_required: bool,
    ) -> list[ChecklistItem]:
        lines = body.splitlines()
        items: list[ChecklistItem] = []

        for line in lines:
            match = _LABELED_BULLET.match(line)
            if not match:
                continue
            title = match.group(1).strip().rstrip(":").strip()
            detail = match.group(2).strip()
            if detail_required and not detail:
                continue
            items.append(
                ChecklistItem(
                    id=f"{id_prefix}-{len(items) + 1}",
                    category=category,
                    content=f"{title}: {detail}" if detail else title,
                    group=title,
                    verification_type=VerificationType.MANUAL,
                )
            )

        if items:
            return items

        # No bold-labelled bullets; fall back to plain ones.
        for line in lines:
            match = _PLAIN_BULLET.match(line)
            if not match:
                continue
            item_content = match.group(1).strip()
            if not item_content or item_content.startswith("#"):
                continue
            items.append(
                ChecklistItem(
                    id=f"{id_prefix}-{len(items) + 1}",
                    category=category,
                    content=item_content,
                    verification_type=VerificationType.MANUAL,
                )
            )

        return items

    def detect_verification_type(self, content: str) -> VerificationType:
        """Classify an item by keyword; defaults to manual."""
        lower_content = content.lower()
        for verification_type, keywords in VERIFICATION_KEYWORDS:
            if any(keyword in lower_content for keyword in keywords):
                return verification_type
        return VerificationType.MANUAL

    def get_summary(self, checklist: ParsedChecklist) -> ChecklistSummary:
        """Count items per section and per verification type."""
        all_items = checklist.all_items()

        def _count(verification_type: VerificationType) -> int:
            return sum(
                1 for item in all_items if item.verification_type == verification_type
            )

        return ChecklistSummary(
            validation=len(checklist.validation_items),
            edge_cases=len(checklist.edge_cases),
            risks=len(checklist.risks),
            automated=_count(VerificationType.AUTOMATED),
            semi_automated=_count(VerificationType.SEMI_AUTOMATED),
            manual=_count(VerificationType.MANUAL),
        )

    def has_checklist(self, content: str) -> bool:
        """Whether any checklist heading is present, items or not."""
        return any(
            pattern.search(content) is not None
            for pattern in (VALIDATION_SECTION, EDGE_CASE_SECTION, RISK_SECTION)
        )
