"""
Factory emitter surface: a listener object paired with an emit function.

Handing out only the ``listener`` lets a component accept subscriptions
while keeping the ability to emit to itself.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional

from .registry import Callback, K, Registry, RegistryConfig, Unsubscribe

EmitMethod = Callable[..., "EmitMethod"]


class Listener(Generic[K]):
    """Subscription side of an emitter/listener pair."""

    def __init__(self, registry: Registry[K]) -> None:
        self._registry = registry

    def on(self, event: K, callback: Callback) -> Unsubscribe:
        """
        Subscribe to an event.

        Args:
            event: Event key to listen on.
            callback: Function to call when the event is emitted.

        Returns:
            An unsubscribe function removing this one registration.
        """
        return self._registry.subscribe(event, callback)

    def off(self, event: K, callback: Callback) -> "Listener[K]":
        """Remove every registration of callback for event."""
        self._registry.unsubscribe(event, callback)
        return self

    def listener_count(self, event: K) -> int:
        return self._registry.listener_count(event)


@dataclass
class EmitterListener(Generic[K]):
    """A listener and the emit function dispatching to it."""

    listener: Listener[K]
    emit: EmitMethod


def create_emitter_listener(config: Optional[RegistryConfig] = None) -> EmitterListener[K]:
    """
    Create a listener/emit pair sharing one private registry.

    ``emit(event, *args)`` returns itself so calls can be chained.

    Args:
        config: Optional RegistryConfig for the underlying registry

    Returns:
        EmitterListener holding the listener and its emit function
    """
    registry: Registry[K] = Registry(config)

    def emit(event: K, *args) -> EmitMethod:
        registry.dispatch(event, *args)
        return emit

    return EmitterListener(listener=Listener(registry), emit=emit)
