"""
Change Notifier - Publishes configuration changes to subscribers.

Subscriptions are per configuration id and have set semantics: subscribing
the identical callback object twice returns the existing subscription.
Callbacks are tracked by identity, so they need not be hashable. Each
subscription can be cancelled on its own.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import threading
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from ..rule_schema import GameConfiguration

logger = logging.getLogger(__name__)

ChangeCallback = Callable[["GameConfiguration"], None]


@dataclass(eq=False)
class Subscription:
    """Handle returned by `ChangeNotifier.subscribe`."""
    config_id: str
    callback: ChangeCallback
    _notifier: ChangeNotifier | None = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return self._notifier is not None

    def cancel(self):
        """Stop receiving notifications. Safe to call more than once."""
        notifier, self._notifier = self._notifier, None
        if notifier is not None:
            notifier.unsubscribe(self)


class ChangeNotifier:
    def __init__(self):
        # config id -> id(callback) -> subscription
        self._subscriptions: dict[str, dict[int, Subscription]] = {}
        self._lock = threading.RLock()

    def subscribe(self, config_id: str, callback: ChangeCallback) -> Subscription:
        with self._lock:
            callbacks = self._subscriptions.setdefault(config_id, {})
            existing = callbacks.get(id(callback))
            if existing is not None:
                return existing
            subscription = Subscription(config_id=config_id, callback=callback, _notifier=self)
            callbacks[id(callback)] = subscription
            return subscription

    def unsubscribe(self, subscription: Subscription):
        with self._lock:
            callbacks = self._subscriptions.get(subscription.config_id)
            if callbacks and callbacks.get(id(subscription.callback)) is subscription:
                del callbacks[id(subscription.callback)]
                if not callbacks:
                    del self._subscriptions[subscription.config_id]
        subscription._notifier = None

    def clear(self, config_id: str):
        """Drop every subscription for a configuration."""
        with self._lock:
            callbacks = self._subscriptions.pop(config_id, {})
        for subscription in callbacks.values():
            subscription._notifier = None

    def subscriber_count(self, config_id: str) -> int:
        return len(self._subscriptions.get(config_id, {}))

    def publish(self, config: GameConfiguration):
        """
        Call every subscriber of `config.game_id` synchronously.

        A failing subscriber is logged and does not stop the others.
        """
        with self._lock:
            callbacks = [s.callback for s in self._subscriptions.get(config.game_id, {}).values()]

        for callback in callbacks:
            try:
                callback(config)
            except Exception:
                logger.exception(f"Change listener failed for configuration '{config.game_id}'")
