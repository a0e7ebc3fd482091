#!/usr/bin/env python3
"""Tests for Status and Priority enums."""

from reminders import Priority, Status


class TestStatus:
    """Tests for Status enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Status.OVERDUE.value < Status.DUE_SOON.value
        assert Status.DUE_SOON.value < Status.UPCOMING.value

    def test_only_projection_statuses(self):
        assert [s.name for s in Status] == ["OVERDUE", "DUE_SOON", "UPCOMING"]


class TestPriority:
    """Tests for Priority enum ordering."""

    def test_higher_value_more_urgent(self):
        assert Priority.LOW.value < Priority.MEDIUM.value < Priority.HIGH.value
