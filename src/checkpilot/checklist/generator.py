"""Fallback checklist generation for prompts without an explicit checklist.

Fast-mode prompts carry no Validation Checklist section, so a basic one is
synthesized from the prompt's intent and a keyword scan of its text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from checkpilot.checklist.models import (
    ChecklistItem,
    ItemCategory,
    ParsedChecklist,
    VerificationType,
)

logger = logging.getLogger(__name__)


class PromptIntent(str, Enum):
    """Closed set of prompt intents with dedicated templates."""

    CODE_GENERATION = "code-generation"
    TESTING = "testing"
    DEBUGGING = "debugging"
    SECURITY_REVIEW = "security-review"
    REFINEMENT = "refinement"
    PLANNING = "planning"
    DOCUMENTATION = "documentation"
    MIGRATION = "migration"
    LEARNING = "learning"
    PRD_GENERATION = "prd-generation"
    SUMMARIZATION = "summarization"


@dataclass(frozen=True, slots=True)
class TemplateItem:
    """Template entry for a generated checklist item."""

    content: str
    group: str | None
    verification_type: VerificationType


_AUTO = VerificationType.AUTOMATED
_SEMI = VerificationType.SEMI_AUTOMATED
_MANUAL = VerificationType.MANUAL

INTENT_CHECKLISTS: dict[PromptIntent, tuple[TemplateItem, ...]] = {
    PromptIntent.CODE_GENERATION: (
        TemplateItem("Code compiles/runs without errors", "Functionality", _AUTO),
        TemplateItem(
            "All requirements from prompt are implemented", "Functionality", _MANUAL
        ),
        TemplateItem("No console errors or warnings", "Quality", _SEMI),
        TemplateItem("Code follows project conventions", "Quality", _AUTO),
    ),
    PromptIntent.TESTING: (
        TemplateItem("All tests pass", "Functionality", _AUTO),
        TemplateItem("Test coverage is acceptable", "Coverage", _AUTO),
        TemplateItem("Edge cases are tested", "Coverage", _MANUAL),
        TemplateItem("Tests are independent (no shared state)", "Quality", _MANUAL),
    ),
    PromptIntent.DEBUGGING: (
        TemplateItem("Bug is fixed", "Functionality", _MANUAL),
        TemplateItem("No regression introduced", "Regression", _AUTO),
        TemplateItem("Root cause is addressed", "Analysis", _MANUAL),
        TemplateItem("Related areas tested for side effects", "Regression", _MANUAL),
    ),
    PromptIntent.SECURITY_REVIEW: (
        TemplateItem("Authentication is verified", "Auth", _MANUAL),
        TemplateItem("Input is properly sanitized", "Input", _MANUAL),
        TemplateItem("Sensitive data is protected", "Data", _MANUAL),
        TemplateItem("No known vulnerabilities", "Security", _MANUAL),
    ),
    PromptIntent.REFINEMENT: (
        TemplateItem("Improvement is implemented", "Functionality", _MANUAL),
        TemplateItem("No functionality regression", "Regression", _AUTO),
        TemplateItem("Performance is not degraded", "Performance", _MANUAL),
        TemplateItem("Code quality is maintained", "Quality", _AUTO),
    ),
    PromptIntent.PLANNING: (
        TemplateItem("Plan is clear and actionable", "Clarity", _MANUAL),
        TemplateItem("All requirements are addressed", "Completeness", _MANUAL),
        TemplateItem("Risks are identified", "Risk", _MANUAL),
    ),
    PromptIntent.DOCUMENTATION: (
        TemplateItem("Documentation is accurate", "Accuracy", _MANUAL),
        TemplateItem("Examples are correct and work", "Accuracy", _MANUAL),
        TemplateItem("Documentation is complete", "Completeness", _MANUAL),
    ),
    PromptIntent.MIGRATION: (
        TemplateItem("Migration completes successfully", "Functionality", _MANUAL),
        TemplateItem("Data integrity is preserved", "Data", _MANUAL),
        TemplateItem("All features work post-migration", "Functionality", _MANUAL),
        TemplateItem("Rollback plan is tested", "Safety", _MANUAL),
    ),
    PromptIntent.LEARNING: (
        TemplateItem("Concept is understood", "Understanding", _MANUAL),
        TemplateItem("Examples are working", "Practice", _MANUAL),
    ),
    PromptIntent.PRD_GENERATION: (
        TemplateItem("PRD covers all requirements", "Completeness", _MANUAL),
        TemplateItem("Success criteria are defined", "Clarity", _MANUAL),
    ),
    PromptIntent.SUMMARIZATION: (
        TemplateItem("Summary captures key points", "Accuracy", _MANUAL),
        TemplateItem("No important details omitted", "Completeness", _MANUAL),
    ),
}

DEFAULT_CHECKLIST: tuple[TemplateItem, ...] = (
    TemplateItem("Task is completed successfully", "Functionality", _MANUAL),
    TemplateItem("No errors or warnings", "Quality", _SEMI),
    TemplateItem("Output meets requirements", "Functionality", _MANUAL),
)

# Each cluster contributes at most one item, independent of the others.
KEYWORD_CLUSTERS: tuple[tuple[tuple[str, ...], TemplateItem], ...] = (
    (
        ("api", "endpoint", "route", "rest", "graphql"),
        TemplateItem("API endpoints return correct responses", "API", _MANUAL),
    ),
    (
        ("ui", "component", "form", "page", "button"),
        TemplateItem("UI renders correctly", "UI", _SEMI),
    ),
    (
        ("database", "db", "query", "schema", "migration"),
        TemplateItem("Database operations work correctly", "Data", _MANUAL),
    ),
    (
        ("auth", "login", "session", "token", "permission"),
        TemplateItem(
            "Authentication/authorization works correctly", "Security", _MANUAL
        ),
    ),
    (
        ("performance", "optimize", "speed", "fast", "slow"),
        TemplateItem("Performance is acceptable", "Performance", _MANUAL),
    ),
)


def _resolve_intent(intent: PromptIntent | str) -> PromptIntent | None:
    if isinstance(intent, PromptIntent):
        return intent
    try:
        return PromptIntent(intent)
    except ValueError:
        return None


def _to_item(index: int, template: TemplateItem) -> ChecklistItem:
    return ChecklistItem(
        id=f"generated-{index}",
        category=ItemCategory.VALIDATION,
        content=template.content,
        group=template.group,
        verification_type=template.verification_type,
    )


class BasicChecklistGenerator:
    """Builds validation checklists from intent templates and keywords."""

    def generate(self, intent: PromptIntent | str) -> ParsedChecklist:
        """Generate the template checklist for an intent.

        Unrecognized intents get the default three-item template.
        """
        resolved = _resolve_intent(intent)
        if resolved is None:
            logger.info("No checklist template for intent %r, using default", intent)
            template = DEFAULT_CHECKLIST
        else:
            template = INTENT_CHECKLISTS[resolved]

        validation_items = [
            _to_item(index, item) for index, item in enumerate(template, start=1)
        ]
        return ParsedChecklist(
            validation_items=validation_items,
            has_checklist=bool(validation_items),
        )

    def generate_from_prompt(
        self, content: str, intent: PromptIntent | str
    ) -> ParsedChecklist:
        """Generate a checklist for a prompt, adding keyword-driven items."""
        checklist = self.generate(intent)
        lower_content = content.lower()

        for keywords, template in KEYWORD_CLUSTERS:
            if any(keyword in lower_content for keyword in keywords):
                index = len(checklist.validation_items) + 1
                checklist.validation_items.append(_to_item(index, template))

        checklist.has_checklist = checklist.total_items > 0
        return checklist

    def get_available_intents(self) -> list[PromptIntent]:
        """Intents that have a dedicated template."""
        return list(INTENT_CHECKLISTS)

    def has_checklist_for_intent(self, intent: PromptIntent | str) -> bool:
        return _resolve_intent(intent) in INTENT_CHECKLISTS
