"""Tests for taskwheel/services/modes.py."""

from types import SimpleNamespace

import pytest

from taskwheel.services.modes import energy_groups, energy_level, is_quick, two_minute_queue


def make_task(title="Task", description=None, completed=False, effort_level=None, tag_ids=()):
    return SimpleNamespace(
        title=title,
        description=description,
        completed=completed,
        effort_level=effort_level,
        tag_ids=list(tag_ids),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Two-minute queue
# ─────────────────────────────────────────────────────────────────────────────


class TestTwoMinute:
    def test_short_title_without_description(self):
        assert is_quick(make_task(title="Reply to Sam"))

    def test_length_limits_are_exclusive(self):
        assert is_quick(make_task(title="x" * 29, description="y" * 49))
        assert not is_quick(make_task(title="x" * 30))
        assert not is_quick(make_task(title="x", description="y" * 50))

    def test_queue_skips_completed(self):
        open_task = make_task(title="Open")
        done = make_task(title="Done", completed=True)

        assert two_minute_queue([open_task, done]) == [open_task]


# ─────────────────────────────────────────────────────────────────────────────
# Energy levels
# ─────────────────────────────────────────────────────────────────────────────


class TestEnergy:
    @pytest.mark.parametrize("effort,expected", [("quick", "low"), ("medium", "medium"), ("high", "high")])
    def test_stored_effort_wins(self, effort, expected):
        task = make_task(title="x" * 50, description="y" * 200, effort_level=effort)

        assert energy_level(task) == expected

    def test_long_text_is_high(self):
        assert energy_level(make_task(description="y" * 101)) == "high"
        assert energy_level(make_task(title="x" * 41)) == "high"

    def test_tags_or_description_is_medium(self):
        assert energy_level(make_task(tag_ids=["a", "b", "c"])) == "medium"
        assert energy_level(make_task(description="short")) == "medium"

    def test_otherwise_low(self):
        assert energy_level(make_task(tag_ids=["a", "b"])) == "low"

    def test_groups_cover_every_level(self):
        low = make_task()
        done = make_task(completed=True)

        groups = energy_groups([low, done])

        assert groups == {"high": [], "medium": [], "low": [low]}
