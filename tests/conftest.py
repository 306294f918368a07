"""Shared fixtures for the html_pipeline test suite."""

import pytest

from html_pipeline.filters import EmojiVocabulary


class RecordingInstrumentation:
    """Instrumentation service that keeps every published event."""

    def __init__(self):
        self.events = []

    def publish(self, event, payload):
        self.events.append((event, payload))

    def names(self):
        return [event for event, _ in self.events]

    def payloads(self, name):
        return [payload for event, payload in self.events if event == name]


@pytest.fixture
def instrumentation():
    return RecordingInstrumentation()


@pytest.fixture
def vocabulary():
    """A tiny emoji table so tests don't depend on the bundled defaults."""
    return EmojiVocabulary(
        {
            "shipit": "shipit.png",
            "+1": "unicode/1f44d.png",
            "smile": "unicode/1f604.png",
        }
    )
