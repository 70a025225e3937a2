"""
Test fixtures for typed_emitter.
"""

from unittest.mock import MagicMock

import pytest

from typed_emitter.core.emitter_listener import EmitterListener, create_emitter_listener
from typed_emitter.core.event_emitter import EventEmitter
from typed_emitter.core.registry import Registry


@pytest.fixture
def registry() -> Registry[str]:
    """Fixture providing an empty registry."""
    return Registry()


@pytest.fixture
def event_emitter() -> EventEmitter[str]:
    """Fixture providing a stateful EventEmitter."""
    return EventEmitter()


@pytest.fixture
def emitter() -> EmitterListener[str]:
    """Fixture providing a listener/emit pair from the factory."""
    return create_emitter_listener()


@pytest.fixture
def on_win() -> MagicMock:
    """Spy for the argument-less "win" event."""
    return MagicMock()


@pytest.fixture
def on_speak() -> MagicMock:
    """Spy for the "speak" event carrying a message."""
    return MagicMock()
