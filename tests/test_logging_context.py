"""Tests for logging context propagation."""

import threading

import pytest

from listing_extractor.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


def test_empty_context():
    """Test that context starts empty."""
    assert get_log_context() == {}


def test_push_and_pop_fields():
    """Test pushing several fields and restoring the previous state."""
    token = push_log_context(url="https://suumo.jp/ms/chuko/nc_1/", profile="suumo")

    assert get_log_context() == {"url": "https://suumo.jp/ms/chuko/nc_1/", "profile": "suumo"}

    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_context():
    """Test nested pushes merge and pops restore each layer."""
    token1 = push_log_context(batch_id="b1")
    token2 = push_log_context(url="https://www.homes.co.jp/tochi/b-1/")

    assert get_log_context() == {"batch_id": "b1", "url": "https://www.homes.co.jp/tochi/b-1/"}

    pop_log_context(token2)
    assert get_log_context() == {"batch_id": "b1"}

    pop_log_context(token1)
    assert get_log_context() == {}


def test_inner_layer_overrides_outer_value():
    """Test that a nested push replaces a field of the same name."""
    with log_context(profile="athome"):
        with log_context(profile="suumo"):
            assert get_log_context()["profile"] == "suumo"
        assert get_log_context()["profile"] == "athome"


def test_get_log_context_returns_copy():
    """Test that mutating the returned dict does not change the context."""
    with log_context(profile="homes"):
        context = get_log_context()
        context["profile"] = "changed"

        assert get_log_context()["profile"] == "homes"


def test_context_manager_restores_on_exception():
    """Test that the context is restored when the block raises."""
    with pytest.raises(RuntimeError):
        with log_context(url="https://www.athome.co.jp/kodate/1/"):
            raise RuntimeError("boom")

    assert get_log_context() == {}


def test_context_is_isolated_between_threads():
    """Test that a context set in one thread is invisible to another."""
    seen = {}

    def worker():
        seen["context"] = get_log_context()

    with log_context(profile="athome"):
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

    assert seen["context"] == {}


def test_clear_log_context():
    """Test clearing all fields."""
    push_log_context(profile="suumo")

    clear_log_context()

    assert get_log_context() == {}
