from zerox_actions.tests.fixtures.aiohttp_session import *  # noqa: F401, F403
from zerox_actions.tests.fixtures.providers_clients import *  # noqa: F401, F403
from zerox_actions.tests.fixtures.runtime import *  # noqa: F401, F403
from zerox_actions.tests.fixtures.tokens import *  # noqa: F401, F403
