# sushi_api/infrastructure/security/password_hasher.py

import base64
import binascii
import hashlib
import hmac
import os
from typing import NamedTuple


class StoredPassword(NamedTuple):
    """Credencial como fica gravada em tbUsers (colunas password_*)."""

    password_hash: str
    password_salt: str
    algo: str
    iterations: int


class PasswordHasher:
    DEFAULT_ALGO = "pbkdf2_sha256"
    ACCEPTED_ALGOS = frozenset({DEFAULT_ALGO, "pbkdf2"})
    DEFAULT_ITERATIONS = 600_000
    SALT_BYTES = 16

    @staticmethod
    def _derive(password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)

    @classmethod
    def hash_password(cls, password: str, *, iterations: int | None = None) -> StoredPassword:
        if not password:
            raise ValueError("Senha inválida.")

        it = iterations or cls.DEFAULT_ITERATIONS
        salt = os.urandom(cls.SALT_BYTES)

        return StoredPassword(
            password_hash=base64.b64encode(cls._derive(password, salt, it)).decode("ascii"),
            password_salt=base64.b64encode(salt).decode("ascii"),
            algo=cls.DEFAULT_ALGO,
            iterations=it,
        )

    @classmethod
    def verify_password(cls, password: str, stored: StoredPassword) -> bool:
        # algoritmo desconhecido ou colunas corrompidas => nunca autentica
        if stored.algo not in cls.ACCEPTED_ALGOS or stored.iterations < 1:
            return False

        try:
            salt = base64.b64decode(stored.password_salt, validate=True)
            expected = base64.b64decode(stored.password_hash, validate=True)
        except (binascii.Error, ValueError):
            return False

        return hmac.compare_digest(cls._derive(password, salt, stored.iterations), expected)
