from logging.config import dictConfig

from flask import Flask

from sushi_api.config.settings import Settings


def _logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "sushi_api": {"handlers": ["console"], "level": level.upper(), "propagate": False},
        },
    }


def configure_app(app: Flask, settings: Settings) -> None:
    app.config["DEBUG"] = settings.debug
    # respostas em espanhol: "Sesión", "Contraseña" sem escapes \uXXXX
    app.json.ensure_ascii = False

    dictConfig(_logging_config(settings.log_level))
