"""
Keyed listener registry shared by both emitter surfaces.
"""

import inspect
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, List, Optional, TypeVar

from ..utils.logging import get_emitter_logger, log_registry_event

K = TypeVar("K", bound=Hashable)

Callback = Callable[..., None]
Unsubscribe = Callable[[], None]


@dataclass
class RegistryConfig:
    """Configuration for a listener registry."""
    name: str = "emitter"       # Logger suffix and "emitter" context field
    log_dispatch: bool = False  # Log a DEBUG record for every dispatch


def _same_callback(registered: Callback, callback: Callback) -> bool:
    """Reference identity, treating bound methods of the same object and function as one."""
    if registered is callback:
        return True
    if inspect.ismethod(registered) and inspect.ismethod(callback):
        return registered.__self__ is callback.__self__ and registered.__func__ is callback.__func__
    return False


class _Registration:
    """One subscribe call. Distinct objects keep repeat registrations apart."""

    __slots__ = ("callback",)

    def __init__(self, callback: Callback) -> None:
        self.callback = callback


class Registry(Generic[K]):
    """
    Ordered listener storage per event key.

    Listeners fire in registration order. A callback registered twice is
    stored twice and fires twice per dispatch. Dispatch iterates a snapshot
    taken under the lock, so callbacks may subscribe or unsubscribe while
    being dispatched; such changes apply from the next dispatch on.
    """

    def __init__(self, config: Optional[RegistryConfig] = None) -> None:
        self.config = config or RegistryConfig()
        self._listeners: Dict[K, List[_Registration]] = {}
        self._lock = threading.Lock()
        self._logger = get_emitter_logger(self.config.name)

    def subscribe(self, key: K, callback: Callback) -> Unsubscribe:
        """
        Register a callback for an event key.

        Args:
            key: Event key to listen on.
            callback: Function to call with the dispatched arguments.

        Returns:
            An unsubscribe function that removes this registration only.
        """
        registration = _Registration(callback)
        with self._lock:
            self._listeners.setdefault(key, []).append(registration)
            count = len(self._listeners[key])
        log_registry_event(
            self._logger, logging.DEBUG, "Listener subscribed", key, listener_count=count
        )

        def unsubscribe() -> None:
            self._remove(key, lambda r: r is registration)

        return unsubscribe

    def unsubscribe(self, key: K, callback: Callback) -> None:
        """
        Remove every registration of a callback under an event key.

        Unknown keys and callbacks are ignored.

        Args:
            key: Event key the callback was registered under.
            callback: The callback to remove.
        """
        self._remove(key, lambda r: _same_callback(r.callback, callback))

    def dispatch(self, key: K, *args) -> None:
        """
        Invoke every callback registered under a key with the given arguments.

        Exceptions raised by a callback propagate to the caller and the
        remaining callbacks are not invoked.

        Args:
            key: Event key to dispatch.
            *args: Positional arguments passed to each callback.
        """
        with self._lock:
            registrations = list(self._listeners.get(key, ()))
        if self.config.log_dispatch:
            log_registry_event(
                self._logger, logging.DEBUG, "Dispatching event", key,
                listener_count=len(registrations),
            )
        for registration in registrations:
            registration.callback(*args)

    def listener_count(self, key: K) -> int:
        """Number of registrations stored under a key."""
        with self._lock:
            return len(self._listeners.get(key, ()))

    def _remove(self, key: K, matches: Callable[[_Registration], bool]) -> None:
        """Drop the registrations under key that match, and the key once empty."""
        with self._lock:
            registrations = self._listeners.get(key)
            if registrations is None:
                return
            kept = [r for r in registrations if not matches(r)]
            removed = len(registrations) - len(kept)
            if kept:
                self._listeners[key] = kept
            else:
                del self._listeners[key]
        if removed:
            log_registry_event(
                self._logger, logging.DEBUG, "Listener unsubscribed", key,
                removed=removed, listener_count=len(kept),
            )
