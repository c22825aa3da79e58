"""
Module: test_registry.py
Description: Unit tests for the connection registry.
"""

import threading

from sentry_sqs.delivery.registry import ConnectionRegistry


class TestConnectionRegistry:
    """Test cases for ConnectionRegistry."""

    def test_register_and_get(self):
        registry = ConnectionRegistry()
        transport = object()

        registry.register("conn-1", transport)

        assert registry.get("conn-1") is transport
        assert "conn-1" in registry
        assert len(registry) == 1

    def test_get_unknown(self):
        assert ConnectionRegistry().get("missing") is None

    def test_register_replaces(self):
        registry = ConnectionRegistry()
        first, second = object(), object()

        registry.register("conn-1", first)
        registry.register("conn-1", second)

        assert registry.get("conn-1") is second
        assert len(registry) == 1

    def test_unregister(self):
        registry = ConnectionRegistry()
        registry.register("conn-1", object())

        assert registry.unregister("conn-1") is True
        assert registry.unregister("conn-1") is False
        assert "conn-1" not in registry

    def test_unregister_only_matching_transport(self):
        registry = ConnectionRegistry()
        current = object()
        registry.register("conn-1", current)

        assert registry.unregister("conn-1", object()) is False
        assert registry.get("conn-1") is current

        assert registry.unregister("conn-1", current) is True

    def test_concurrent_registration(self):
        registry = ConnectionRegistry()

        def register_many(prefix):
            for i in range(200):
                registry.register(f"{prefix}-{i}", object())

        threads = [threading.Thread(target=register_many, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 800

    def test_clear(self):
        registry = ConnectionRegistry()
        registry.register("conn-1", object())

        registry.clear()

        assert len(registry) == 0
