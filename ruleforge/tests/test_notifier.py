"""
Tests for configuration change subscriptions.
"""

import logging
from dataclasses import dataclass, field

from ..engine_core import ChangeNotifier


@dataclass
class RecordingListener:
    """Callable listener; as a dataclass with eq it is unhashable."""
    seen: list = field(default_factory=list)

    def __call__(self, config):
        self.seen.append(config.game_id)


class TestSubscriptions:
    """Tests for subscribing and cancelling."""

    def test_listener_called_on_change(self, demo_engine, demo_config):
        """Every mutation notifies the configuration's listeners."""
        seen = []
        demo_engine.on_configuration_change(demo_config.game_id, seen.append)

        demo_engine.enable_rule(demo_config.game_id, "r2")
        demo_engine.set_rule_parameter(demo_config.game_id, "r1", "x", 10)

        assert seen == [demo_config, demo_config]

    def test_listener_sees_updated_state(self, demo_engine, demo_config):
        """Listeners run after the change is applied."""
        snapshots = []
        demo_engine.on_configuration_change(
            demo_config.game_id, lambda config: snapshots.append(list(config.active_rules))
        )

        demo_engine.enable_rule(demo_config.game_id, "r2")

        assert snapshots == [["r1", "r4", "r2"]]

    def test_listener_validation_is_fresh(self, demo_engine, demo_config):
        """Validating inside a listener never sees a stale cached result."""
        results = []
        demo_engine.validate_configuration(demo_config.game_id)
        demo_engine.on_configuration_change(
            demo_config.game_id,
            lambda config: results.append(demo_engine.validate_configuration(config.game_id).valid),
        )

        demo_engine.enable_rule(demo_config.game_id, "r2")

        assert results == [True]

    def test_other_configurations_not_notified(self, demo_engine, demo_config):
        """Listeners are scoped to one configuration id."""
        other = demo_engine.create_configuration("demo", "Other")
        seen = []
        demo_engine.on_configuration_change(other.game_id, seen.append)

        demo_engine.enable_rule(demo_config.game_id, "r2")

        assert seen == []

    def test_same_callback_subscribed_once(self, demo_engine, demo_config):
        """Subscribing the same callback twice is a no-op."""
        seen = []
        listener = seen.append
        first = demo_engine.on_configuration_change(demo_config.game_id, listener)
        second = demo_engine.on_configuration_change(demo_config.game_id, listener)

        demo_engine.enable_rule(demo_config.game_id, "r2")

        assert first is second
        assert len(seen) == 1

    def test_cancel_stops_notifications(self, demo_engine, demo_config):
        """A cancelled subscription receives nothing more."""
        seen = []
        subscription = demo_engine.on_configuration_change(demo_config.game_id, seen.append)

        demo_engine.enable_rule(demo_config.game_id, "r2")
        subscription.cancel()
        demo_engine.enable_rule(demo_config.game_id, "r3")

        assert len(seen) == 1
        assert subscription.active is False

    def test_cancel_twice_is_safe(self, demo_engine, demo_config):
        """Cancelling is idempotent."""
        subscription = demo_engine.on_configuration_change(demo_config.game_id, lambda c: None)
        subscription.cancel()
        demo_engine.unsubscribe(subscription)

        assert demo_engine.notifier.subscriber_count(demo_config.game_id) == 0

    def test_cancel_only_own_subscription(self, demo_engine, demo_config):
        """Cancelling one subscription leaves the others in place."""
        a, b = [], []
        sub_a = demo_engine.on_configuration_change(demo_config.game_id, a.append)
        demo_engine.on_configuration_change(demo_config.game_id, b.append)

        sub_a.cancel()
        demo_engine.enable_rule(demo_config.game_id, "r2")

        assert a == []
        assert len(b) == 1

    def test_failing_listener_does_not_block_others(self, demo_engine, demo_config, caplog):
        """A raising listener is logged and the rest still run."""
        seen = []

        def broken(config):
            raise RuntimeError("boom")

        demo_engine.on_configuration_change(demo_config.game_id, broken)
        demo_engine.on_configuration_change(demo_config.game_id, seen.append)

        with caplog.at_level(logging.ERROR):
            demo_engine.enable_rule(demo_config.game_id, "r2")

        assert len(seen) == 1
        assert "r2" in demo_config.active_rules
        assert "Change listener failed" in caplog.text

    def test_delete_clears_subscriptions(self, demo_engine, demo_config):
        """Deleting a configuration deactivates its subscriptions."""
        subscription = demo_engine.on_configuration_change(demo_config.game_id, lambda c: None)
        demo_engine.delete_configuration(demo_config.game_id)

        assert subscription.active is False
        assert demo_engine.notifier.subscriber_count(demo_config.game_id) == 0


class TestChangeNotifier:
    """Tests for the notifier on its own."""

    def test_subscribe_before_configuration_exists(self):
        """Subscriptions can be made for ids that do not exist yet."""
        notifier = ChangeNotifier()
        subscription = notifier.subscribe("future", lambda c: None)

        assert subscription.active
        assert notifier.subscriber_count("future") == 1

    def test_publish_without_subscribers(self, demo_config):
        """Publishing with no subscribers does nothing."""
        ChangeNotifier().publish(demo_config)

    def test_unhashable_callback(self, demo_engine, demo_config):
        """Callables without a hash can subscribe and be cancelled."""
        listener = RecordingListener()
        subscription = demo_engine.on_configuration_change(demo_config.game_id, listener)

        demo_engine.enable_rule(demo_config.game_id, "r2")
        subscription.cancel()
        demo_engine.enable_rule(demo_config.game_id, "r3")

        assert listener.seen == [demo_config.game_id]

    def test_equal_callbacks_are_separate(self):
        """Equal but distinct callables get their own subscriptions."""
        notifier = ChangeNotifier()
        first = notifier.subscribe("c1", RecordingListener())
        second = notifier.subscribe("c1", RecordingListener())

        assert first.callback == second.callback
        assert first is not second
        assert notifier.subscriber_count("c1") == 2
