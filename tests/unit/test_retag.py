"""Tests for taskwheel/tagging/retag.py and the family classifiers."""

import pytest

from taskwheel.tagging import (
    EffortLevel,
    Quadrant,
    TagFamily,
    TagRule,
    eisenhower_buckets,
    effort_buckets,
    retag_for_effort,
    retag_for_quadrant,
    retag_for_time_category,
)


# ─────────────────────────────────────────────────────────────────────────────
# Families
# ─────────────────────────────────────────────────────────────────────────────


class TestTagFamily:
    def test_category_families(self, catalog):
        assert TagFamily.EISENHOWER.member_ids(catalog) == {"ui-urgent", "ui-important", "ui-both", "ui-neither"}
        assert TagFamily.TIME_BASED.member_ids(catalog) == {"tb-week", "tb-month"}
        assert TagFamily.EFFORT.member_ids(catalog) == {"e-quick", "e-easy", "e-medium", "e-high"}

    def test_urgency_family_by_name(self, catalog):
        # "Urgent" in the Eisenhower category is also an urgency tag by name
        assert TagFamily.URGENCY.member_ids(catalog) == {
            "tag-asap", "tag-urgent", "tag-soon", "tag-later", "ui-urgent",
        }

    def test_eisenhower_buckets(self, eisenhower_tags):
        buckets = eisenhower_buckets(eisenhower_tags)

        assert [t.id for t in buckets["urgent"]] == ["ui-urgent"]
        assert [t.id for t in buckets["important"]] == ["ui-important"]
        assert [t.id for t in buckets["both"]] == ["ui-both"]
        assert [t.id for t in buckets["neither"]] == ["ui-neither"]

    def test_effort_buckets(self, effort_tags):
        buckets = effort_buckets(effort_tags)

        assert {t.id for t in buckets[EffortLevel.quick]} == {"e-quick", "e-easy"}
        assert {t.id for t in buckets[EffortLevel.medium]} == {"e-medium"}
        assert {t.id for t in buckets[EffortLevel.high]} == {"e-high"}


# ─────────────────────────────────────────────────────────────────────────────
# Eisenhower quadrant
# ─────────────────────────────────────────────────────────────────────────────


class TestRetagForQuadrant:
    def test_urgent_important_prefers_combined_tags(self, catalog):
        result = retag_for_quadrant({"t1", "ui-neither"}, Quadrant.urgent_important, catalog)

        assert result == {"t1", "ui-both"}

    def test_urgent_important_falls_back_to_union(self, catalog):
        without_both = [t for t in catalog if t.id != "ui-both"]

        result = retag_for_quadrant(set(), "urgent-important", without_both)

        assert result == {"ui-urgent", "ui-important"}

    def test_not_urgent_important(self, catalog):
        assert retag_for_quadrant({"ui-urgent"}, Quadrant.not_urgent_important, catalog) == {"ui-important"}

    def test_urgent_not_important(self, catalog):
        assert retag_for_quadrant({"ui-important"}, Quadrant.urgent_not_important, catalog) == {"ui-urgent"}

    def test_not_urgent_not_important_is_exclusive(self, catalog):
        start = {"ui-urgent", "ui-important", "ui-both", "t1", "e-easy"}

        result = retag_for_quadrant(start, Quadrant.not_urgent_not_important, catalog)

        family = TagFamily.EISENHOWER.member_ids(catalog)
        assert result & family == {"ui-neither"}
        assert result - family == {"t1", "e-easy"}

    def test_classification_ignores_case(self):
        catalog = [TagRule(id="x", name="URGENT!!", category="urgency-importance")]

        assert retag_for_quadrant(set(), Quadrant.urgent_not_important, catalog) == {"x"}

    def test_tags_outside_the_category_are_not_family(self, catalog):
        """The default "urgent" tag lives in "general" and is left alone."""
        result = retag_for_quadrant({"tag-urgent"}, Quadrant.not_urgent_not_important, catalog)

        assert "tag-urgent" in result

    def test_unknown_tag_ids_are_kept(self, catalog):
        assert "gone" in retag_for_quadrant({"gone"}, Quadrant.urgent_important, catalog)

    def test_rejects_unknown_quadrant(self, catalog):
        with pytest.raises(ValueError):
            retag_for_quadrant(set(), "whenever", catalog)

    def test_input_is_not_mutated(self, catalog):
        tags = {"ui-urgent"}

        retag_for_quadrant(tags, Quadrant.not_urgent_important, catalog)

        assert tags == {"ui-urgent"}


# ─────────────────────────────────────────────────────────────────────────────
# Time categories
# ─────────────────────────────────────────────────────────────────────────────


class TestRetagForTimeCategory:
    def test_matches_by_name(self, catalog, time_categories):
        result = retag_for_time_category({"t1", "tb-month"}, "this-week", catalog, time_categories)

        assert result == {"t1", "tb-week"}

    def test_matches_by_keyword_in_category_name(self, catalog, time_categories):
        result = retag_for_time_category({"tb-week"}, "next-month", catalog, time_categories)

        assert result == {"tb-month"}

    def test_no_matching_tag_leaves_slot_empty(self, catalog, time_categories):
        result = retag_for_time_category({"t1", "tb-week"}, "someday", catalog, time_categories)

        assert result == {"t1"}

    def test_unknown_category_keeps_tags(self, catalog, time_categories):
        result = retag_for_time_category({"t1", "tb-week"}, "missing", catalog, time_categories)

        assert result == {"t1", "tb-week"}

    def test_name_match_wins_over_keyword(self, time_categories):
        catalog = [
            TagRule(id="kw", name="Weekly", keywords=["week"], category="time-based"),
            TagRule(id="exact", name="this week", category="time-based"),
        ]

        assert retag_for_time_category(set(), "this-week", catalog, time_categories) == {"exact"}


# ─────────────────────────────────────────────────────────────────────────────
# Effort
# ─────────────────────────────────────────────────────────────────────────────


class TestRetagForEffort:
    def test_quick(self, catalog):
        assert retag_for_effort({"t1", "e-high"}, EffortLevel.quick, catalog) == {"t1", "e-quick", "e-easy"}

    def test_medium(self, catalog):
        assert retag_for_effort({"e-quick"}, "medium", catalog) == {"e-medium"}

    def test_high(self, catalog):
        assert retag_for_effort(set(), EffortLevel.high, catalog) == {"e-high"}

    def test_families_are_independent(self, catalog, time_categories):
        tags = retag_for_quadrant({"t1"}, Quadrant.urgent_not_important, catalog)
        tags = retag_for_time_category(tags, "this-week", catalog, time_categories)
        tags = retag_for_effort(tags, EffortLevel.high, catalog)

        assert tags == {"t1", "ui-urgent", "tb-week", "e-high"}
