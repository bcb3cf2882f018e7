"""
tests/conftest.py

Shared fixtures: a host that records every outbound call.
"""

from datetime import datetime

import pytest


class RecordingHost:

    def __init__(self):
        self.created = []
        self.optimistic = []
        self.commits = []
        self.opened = []
        self.visible = []

    def request_create(self, request):
        self.created.append(request)

    def apply_optimistic_update(self, item_id, start, end):
        self.optimistic.append((item_id, start, end))

    def request_commit_move(self, commit):
        self.commits.append(commit)

    def request_open_details(self, item):
        self.opened.append(item)

    def on_visible_day_index_change(self, index):
        self.visible.append(index)


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def utc():
    """Builder for aware UTC datetimes: utc(2026, 1, 1, 9, 30)."""
    from datetime import timezone

    def build(*args):
        return datetime(*args, tzinfo=timezone.utc)

    return build
