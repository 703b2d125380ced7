from flask import current_app

from sushi_api.container import SERVICES_KEY, AppServices


def get_services() -> AppServices:
    return current_app.extensions[SERVICES_KEY]
