"""Test harness for unit and integration tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from discuss.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that builds a test container with the given
    components unmocked and yields a request-scoped container.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_load_thread(unit_env):
            service = await unit_env.get(ThreadService)
            forest = await service.load_thread(post_id)
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
