"""Tests for checklist extraction from prompt markdown."""

from __future__ import annotations

import pytest

from checkpilot.checklist import (
    ChecklistParser,
    ItemCategory,
    VerificationType,
)

DEEP_PROMPT = """# Build the signup flow

Some context about the task.

## Validation Checklist

**Functionality:**
☐ Code compiles without errors
☐ UI renders on mobile
- [ ] Error messages are clear

**Quality:**
□ All tests pass

### Edge Cases to Consider

* **Empty input**: form submitted with no fields
* **Network failure:** API unreachable during submit
- **No detail**

## What Could Go Wrong

• **Race condition**: two saves at once
- **Data loss**

## Next Steps
- Not a checklist item
"""


@pytest.fixture
def parser() -> ChecklistParser:
    return ChecklistParser()


class TestParseValidationSection:
    """Tests for the Validation Checklist section."""

    def test_extracts_items_with_groups(self, parser: ChecklistParser) -> None:
        items = parser.parse_validation_section(DEEP_PROMPT)

        assert [item.content for item in items] == [
            "Code compiles without errors",
            "UI renders on mobile",
            "Error messages are clear",
            "All tests pass",
        ]
        assert [item.group for item in items] == [
            "Functionality",
            "Functionality",
            "Functionality",
            "Quality",
        ]
        assert [item.id for item in items] == [
            "validation-1",
            "validation-2",
            "validation-3",
            "validation-4",
        ]
        assert all(item.category == ItemCategory.VALIDATION for item in items)

    def test_classifies_verification_type(self, parser: ChecklistParser) -> None:
        items = parser.parse_validation_section(DEEP_PROMPT)

        assert [item.verification_type for item in items] == [
            VerificationType.AUTOMATED,
            VerificationType.SEMI_AUTOMATED,
            VerificationType.MANUAL,
            VerificationType.AUTOMATED,
        ]

    def test_items_before_any_label_have_no_group(
        self, parser: ChecklistParser
    ) -> None:
        content = "## Validation Checklist\n○ First thing\n● Second thing\n"
        items = parser.parse_validation_section(content)

        assert [item.content for item in items] == ["First thing", "Second thing"]
        assert all(item.group is None for item in items)

    def test_heading_is_case_insensitive(self, parser: ChecklistParser) -> None:
        content = "### validation checklist\n◯ Works\n"
        assert len(parser.parse_validation_section(content)) == 1

    def test_other_heading_levels_are_ignored(self, parser: ChecklistParser) -> None:
        assert parser.parse_validation_section("# Validation Checklist\n☐ A\n") == []
        assert (
            parser.parse_validation_section("#### Validation Checklist\n☐ A\n") == []
        )

    def test_missing_section_yields_empty_list(self, parser: ChecklistParser) -> None:
        assert parser.parse_validation_section("Just some prose.") == []

    def test_section_ends_at_next_heading(self, parser: ChecklistParser) -> None:
        content = "## Validation Checklist\n☐ Inside\n## Notes\n☐ Outside\n"
        items = parser.parse_validation_section(content)
        assert [item.content for item in items] == ["Inside"]


class TestParseEdgeCasesAndRisks:
    """Tests for the bullet-based sections."""

    def test_edge_cases_require_detail(self, parser: ChecklistParser) -> None:
        items = parser.parse_edge_case_section(DEEP_PROMPT)

        assert [item.content for item in items] == [
            "Empty input: form submitted with no fields",
            "Network failure: API unreachable during submit",
        ]
        assert [item.group for item in items] == ["Empty input", "Network failure"]
        assert [item.id for item in items] == ["edge-case-1", "edge-case-2"]
        assert all(item.category == ItemCategory.EDGE_CASE for item in items)
        assert all(
            item.verification_type == VerificationType.MANUAL for item in items
        )

    def test_risks_allow_missing_detail(self, parser: ChecklistParser) -> None:
        items = parser.parse_risk_section(DEEP_PROMPT)

        assert [item.content for item in items] == [
            "Race condition: two saves at once",
            "Data loss",
        ]
        assert [item.id for item in items] == ["risk-1", "risk-2"]
        assert all(item.category == ItemCategory.RISK for item in items)

    def test_plain_bullets_fallback(self, parser: ChecklistParser) -> None:
        content = (
            "## What Could Go Wrong\n"
            "- The cache goes stale\n"
            "* Users double-submit\n"
            "- # not an item\n"
        )
        items = parser.parse_risk_section(content)

        assert [item.content for item in items] == [
            "The cache goes stale",
            "Users double-submit",
        ]
        assert all(item.group is None for item in items)
        assert all(
            item.verification_type == VerificationType.MANUAL for item in items
        )

    def test_fallback_not_used_when_labelled_bullets_exist(
        self, parser: ChecklistParser
    ) -> None:
        content = (
            "## Edge Cases to Consider\n"
            "- **Timeout**: server is slow\n"
            "- plain bullet\n"
        )
        items = parser.parse_edge_case_section(content)
        assert [item.content for item in items] == ["Timeout: server is slow"]


class TestParse:
    """Tests for the combined parse and summary."""

    def test_parse_all_sections(self, parser: ChecklistParser) -> None:
        checklist = parser.parse(DEEP_PROMPT)

        assert len(checklist.validation_items) == 4
        assert len(checklist.edge_cases) == 2
        assert len(checklist.risks) == 2
        assert checklist.total_items == 8
        assert checklist.has_checklist is True

    def test_ids_unique_within_result(self, parser: ChecklistParser) -> None:
        ids = [item.id for item in parser.parse(DEEP_PROMPT).all_items()]
        assert len(ids) == len(set(ids))

    def test_parse_without_sections(self, parser: ChecklistParser) -> None:
        checklist = parser.parse("# Fast prompt\n\nDo the thing.")

        assert checklist.total_items == 0
        assert checklist.has_checklist is False

    def test_parse_never_raises_on_odd_input(self, parser: ChecklistParser) -> None:
        checklist = parser.parse("## Validation Checklist\n\n**:**\n☐\n- [ ]\n")
        assert checklist.total_items == 0

    def test_summary_counts(self, parser: ChecklistParser) -> None:
        summary = parser.get_summary(parser.parse(DEEP_PROMPT))

        assert summary.validation == 4
        assert summary.edge_cases == 2
        assert summary.risks == 2
        assert summary.automated == 2
        assert summary.semi_automated == 1
        assert summary.manual == 5

    def test_has_checklist_detects_heading_only(
        self, parser: ChecklistParser
    ) -> None:
        assert parser.has_checklist("## What Could Go Wrong\n") is True
        assert parser.has_checklist("no headings here") is False


class TestDetectVerificationType:
    """Tests for keyword classification."""

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("Project builds cleanly", VerificationType.AUTOMATED),
            ("npm test exits with exit code 0", VerificationType.AUTOMATED),
            ("Page layout matches the mockup", VerificationType.SEMI_AUTOMATED),
            ("No console errors in the browser", VerificationType.SEMI_AUTOMATED),
            ("Feels intuitive to a new user", VerificationType.MANUAL),
        ],
    )
    def test_keywords(
        self,
        parser: ChecklistParser,
        content: str,
        expected: VerificationType,
    ) -> None:
        assert parser.detect_verification_type(content) == expected

    def test_automated_wins_over_semi_automated(
        self, parser: ChecklistParser
    ) -> None:
        result = parser.detect_verification_type("Lint passes and the page renders")
        assert result == VerificationType.AUTOMATED
