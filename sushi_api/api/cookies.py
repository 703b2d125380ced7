# sushi_api/api/cookies.py

from flask import Response

from sushi_api.config.settings import Settings


def set_refresh_cookie(response: Response, refresh_token: str, settings: Settings) -> None:
    # httpOnly: o JS do navegador nunca lê o refresh token
    response.set_cookie(
        settings.refresh_cookie_name,
        refresh_token,
        max_age=settings.refresh_token_seconds,
        httponly=True,
        secure=settings.refresh_cookie_secure,
        samesite="Strict",
        path=settings.refresh_cookie_path,
    )


def clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        settings.refresh_cookie_name,
        path=settings.refresh_cookie_path,
        httponly=True,
        secure=settings.refresh_cookie_secure,
        samesite="Strict",
    )
