"""
Stateful-object emitter surface.
"""

from typing import Generic, Optional

from .registry import Callback, K, Registry, RegistryConfig, Unsubscribe


class EventEmitter(Generic[K]):
    """
    Event emitter owning a private listener registry.

    ``off`` and ``emit`` return the emitter so calls can be chained::

        emitter = EventEmitter[str]()
        unsubscribe = emitter.on("speak", print)
        emitter.emit("speak", "hello").emit("speak", "again")
        unsubscribe()
    """

    def __init__(self, config: Optional[RegistryConfig] = None) -> None:
        self._registry: Registry[K] = Registry(config)

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

    def off(self, event: K, callback: Callback) -> "EventEmitter[K]":
        """Remove every registration of callback for event."""
        self._registry.unsubscribe(event, callback)
        return self

    def emit(self, event: K, *args) -> "EventEmitter[K]":
        """Call every listener of event with args, in registration order."""
        self._registry.dispatch(event, *args)
        return self

    def listener_count(self, event: K) -> int:
        return self._registry.listener_count(event)
