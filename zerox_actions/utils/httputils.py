import os
from typing import Optional

import ujson
from aiohttp import ClientSession

# Shared by the 0x provider and the token list client for the lifetime of the process.
# See: https://docs.aiohttp.org/en/stable/client_quickstart.html#make-a-request
CLIENT_SESSION: Optional[ClientSession] = None


class ProxiedClientSession(ClientSession):
    """
    Sends requests through PROXY_URL when it is set.
    `trust_env=True` is not an option: it would proxy APM traffic too.
    """

    async def _request(self, *args, **kwargs):
        kwargs.setdefault('proxy', os.environ.get('PROXY_URL'))
        return await super()._request(*args, **kwargs)


async def setup_client_session() -> ClientSession:
    global CLIENT_SESSION  # pylint: disable=global-statement
    if CLIENT_SESSION is None or CLIENT_SESSION.closed:
        CLIENT_SESSION = ProxiedClientSession(json_serialize=ujson.dumps)
    return CLIENT_SESSION


async def get_client_session(session: Optional[ClientSession] = None) -> ClientSession:
    """`session` while it is open, the shared session otherwise."""
    if session is not None and not session.closed:
        return session
    return await setup_client_session()


async def teardown_client_session() -> None:
    global CLIENT_SESSION  # pylint: disable=global-statement
    if CLIENT_SESSION is not None:
        await CLIENT_SESSION.close()
    CLIENT_SESSION = None
