import pytest


@pytest.fixture
def anyio_backend():
    # The application is built on asyncio (asyncio.TaskGroup, etc.).
    return "asyncio"
