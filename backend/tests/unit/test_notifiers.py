"""Unit tests for the notifier adapters."""

import logging

from care_sync.infrastructure.logging.notifiers import RecordingNotifier


def test_drain_returns_and_clears():
    notifier = RecordingNotifier()
    notifier.success("Saved", "Vital signs saved")
    notifier.error("Error", "Could not save", retryable=False)

    items = notifier.drain()

    assert [(n.level, n.title, n.retryable) for n in items] == [
        ("success", "Saved", False),
        ("error", "Error", False),
    ]
    assert notifier.drain() == []


def test_only_latest_notifications_are_kept():
    notifier = RecordingNotifier(max_items=2)
    for index in range(5):
        notifier.success("Saved", f"#{index}")

    assert [n.message for n in notifier.drain()] == ["#3", "#4"]


def test_errors_are_logged(caplog):
    notifier = RecordingNotifier()
    with caplog.at_level(logging.WARNING, logger="care_sync.infrastructure.logging.notifiers"):
        notifier.error("Error", "Could not save vital signs")

    assert "Could not save vital signs" in caplog.text
