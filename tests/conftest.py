"""Pytest configuration and fixtures"""
import os
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Set test environment variables before mvicart modules read them
os.environ.setdefault("CART_FETCH_DELAY_SECONDS", "0")

from mvicart.cart import CartItem, FailingCartRepository, FakeCartRepository, create_cart_store  # noqa: E402


@pytest.fixture
def fake_repository():
    """Fake repository without simulated latency"""
    return FakeCartRepository(delay=0)


@pytest.fixture
def failing_repository():
    """Data source whose fetch always raises"""
    return FailingCartRepository("backend down")


@pytest.fixture
def mock_data_source():
    """Data source with an AsyncMock fetch_items; set side_effect per test"""
    source = Mock()
    source.fetch_items = AsyncMock()
    return source


@pytest.fixture
def sample_item():
    """Sample cart item"""
    return CartItem(
        id="42",
        name="USB-C Cable",
        price="9.99",
        quantity=3,
        image_url="https://example.com/cable.jpg",
    )


@pytest_asyncio.fixture
async def cart_store(fake_repository):
    """Cart store backed by the fake repository, closed after the test"""
    store = create_cart_store(fake_repository)
    yield store
    await store.close()


@pytest.fixture
def recorded():
    """Attach list recorders to a store: returns (states, effects)"""
    def attach(store):
        states = []
        effects = []
        store.subscribe_state(states.append)
        store.subscribe_effects(effects.append)
        return states, effects

    return attach
