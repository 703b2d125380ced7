# sushi_api/api/schemas/auth_schema.py
from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr = Field(alias="correo")
    password: str = Field(alias="contraseña", min_length=1, max_length=200)


class LoginResponse(BaseModel):
    id: int
    nombre: str
    rol: str
    access_token: str = Field(serialization_alias="accessToken")


class RefreshRequest(BaseModel):
    # fallback quando o cookie não vem (clientes sem cookie jar)
    refresh_token: str | None = Field(default=None, alias="refreshToken")


class AccessTokenResponse(BaseModel):
    access_token: str = Field(serialization_alias="accessToken")


class MessageResponse(BaseModel):
    message: str


class RevokeAllResponse(BaseModel):
    revoked: int
