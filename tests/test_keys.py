"""Tests for the API key store."""

import threading

import pytest

from weather_gateway.exceptions import (
    InvalidInputError,
    KeyAlreadyExistsError,
    KeyNotFoundError,
)
from weather_gateway.services.keys import KeyStore, mask_key


class TestKeyStore:
    """Tests for KeyStore."""

    def test_seed_keys_are_valid(self, key_store: KeyStore) -> None:
        """Test keys supplied at startup validate."""
        assert key_store.validate("K1") is True
        assert key_store.validate("K2") is True
        assert key_store.validate("K3") is False

    def test_validate_none(self, key_store: KeyStore) -> None:
        assert key_store.validate(None) is False

    def test_validate_is_case_sensitive(self, key_store: KeyStore) -> None:
        assert key_store.validate("k1") is False

    def test_add_then_validate(self, key_store: KeyStore) -> None:
        """Test an added key becomes valid."""
        key_store.add("NEW")
        assert key_store.validate("NEW") is True
        assert "NEW" in key_store.list()

    def test_add_existing_key_rejected(self, key_store: KeyStore) -> None:
        """Test adding an existing key fails and does not duplicate it."""
        with pytest.raises(KeyAlreadyExistsError):
            key_store.add("K1")
        assert len(key_store) == 2
        assert key_store.list() == {"K1", "K2"}

    @pytest.mark.parametrize("key", ["", "   ", None])
    def test_add_blank_key_rejected(self, key_store: KeyStore, key: str | None) -> None:
        with pytest.raises(InvalidInputError):
            key_store.add(key)  # type: ignore[arg-type]
        assert len(key_store) == 2

    def test_delete(self, key_store: KeyStore) -> None:
        """Test a deleted key is no longer valid."""
        key_store.delete("K1")
        assert key_store.validate("K1") is False
        assert key_store.list() == {"K2"}

    def test_delete_then_add_again(self, key_store: KeyStore) -> None:
        key_store.delete("K1")
        key_store.add("K1")
        assert key_store.validate("K1") is True

    @pytest.mark.parametrize("key", ["missing", "", "  "])
    def test_delete_missing_or_blank_key(self, key_store: KeyStore, key: str) -> None:
        with pytest.raises(KeyNotFoundError):
            key_store.delete(key)
        assert len(key_store) == 2

    def test_list_returns_snapshot(self, key_store: KeyStore) -> None:
        """Test mutations after list() do not change the returned set."""
        snapshot = key_store.list()
        key_store.add("K3")
        key_store.delete("K1")
        assert snapshot == {"K1", "K2"}

        snapshot.add("tampered")
        assert key_store.validate("tampered") is False

    def test_blank_seed_keys_ignored(self) -> None:
        store = KeyStore(["A", "", "  ", "A"])
        assert store.list() == {"A"}

    def test_concurrent_adds(self) -> None:
        """Test concurrent adds of distinct keys are all kept."""
        store = KeyStore()

        def add_range(start: int) -> None:
            for i in range(start, start + 200):
                store.add(f"key-{i}")

        threads = [threading.Thread(target=add_range, args=(n * 200,)) for n in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 1000


def test_mask_key() -> None:
    assert mask_key("b2180c8ac8633b32549bb10ac4ca7730") == "b218***"
    assert mask_key("") == "<empty>"
