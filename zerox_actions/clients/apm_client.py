from typing import Any, Optional

import elasticapm
from elasticapm.base import Client

from zerox_actions.config import Config
from zerox_actions.utils.logger import get_logger

logger = get_logger(__name__)


class ApmClient:
    def __init__(self, config: Config):
        self.client: Optional[Client] = None
        self._make_apm_client(config)

    def _make_apm_client(self, config: Config) -> Client:
        if self.client:
            return self.client
        apm_config = {
            'SERVICE_NAME': config.SERVICE_NAME,
            'SERVER_URL': config.APM_SERVER_URL,
            'ENABLED': config.APM_ENABLED,
            'RECORDING': config.APM_RECORDING,
            'CAPTURE_HEADERS': config.APM_CAPTURE_HEADERS,
            'LOG_LEVEL': config.LOG_LEVEL,
            'ENVIRONMENT': config.ENVIRONMENT,
            'SERVICE_VERSION': config.VERSION,
        }
        self.client = elasticapm.get_client() or Client(apm_config)
        return self.client

    def trace_result(self, state: Optional[dict], response: Any) -> None:
        """Report the outcome of an agent action. Fire and forget."""
        text = getattr(response, 'text', response)
        labels = {
            'room_id': str((state or {}).get('roomId', '')),
            'agent': str((state or {}).get('agentName', '')),
        }
        logger.debug('Action result traced: %s', text, extra=labels)
        self.client.capture_message(
            param_message={'message': 'action result: %s', 'params': (text,)},
            custom=labels,
        )
