# sushi_api/core/exceptions.py

class AppError(Exception):
    code = "app_error"

    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    code = "not_found"

    def __init__(self, message: str = "Recurso no encontrado.") -> None:
        super().__init__(message, status_code=404)


class UnauthorizedError(AppError):
    code = "unauthorized"

    def __init__(self, message: str = "No autorizado.") -> None:
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    code = "forbidden"

    def __init__(self, message: str = "Acceso denegado.") -> None:
        super().__init__(message, status_code=403)


# -------------------------
# Autenticação / sessão
# -------------------------

class AuthenticationRequiredError(UnauthorizedError):
    code = "authentication_required"

    def __init__(self, message: str = "Token de autenticación requerido.") -> None:
        super().__init__(message)


class InvalidCredentialError(UnauthorizedError):
    code = "invalid_credential"

    def __init__(self, message: str = "Contraseña inválida.") -> None:
        super().__init__(message)


class InvalidTokenError(UnauthorizedError):
    code = "invalid_or_expired_token"

    def __init__(self, message: str = "Token inválido.") -> None:
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    def __init__(self, message: str = "Token expirado.") -> None:
        super().__init__(message)


class ReuseDetectedError(ForbiddenError):
    code = "reuse_detected"

    def __init__(self, message: str = "Refresh Token inválido o reutilizado.") -> None:
        super().__init__(message)


class UserNotFoundError(NotFoundError):
    code = "user_not_found"

    def __init__(self, message: str = "Usuario no encontrado.") -> None:
        super().__init__(message)
