import pytest

from zerox_actions.utils.httputils import setup_client_session, teardown_client_session


@pytest.fixture()
async def aiohttp_session():
    session = await setup_client_session()
    yield session
    await teardown_client_session()
