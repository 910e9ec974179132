from zerox_actions.config import config
from zerox_actions.rest_api.create_app import create_app

app = create_app(config)
