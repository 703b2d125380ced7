import pytest

from sushi_api.infrastructure.security.password_hasher import PasswordHasher


def test_hash_and_verify():
    stored = PasswordHasher.hash_password("Sushi!2024", iterations=1_000)

    assert stored.algo == PasswordHasher.DEFAULT_ALGO
    assert stored.iterations == 1_000
    assert PasswordHasher.verify_password("Sushi!2024", stored)
    assert not PasswordHasher.verify_password("sushi!2024", stored)


def test_same_password_gets_different_salts():
    first = PasswordHasher.hash_password("x", iterations=1_000)
    second = PasswordHasher.hash_password("x", iterations=1_000)

    assert first.password_hash != second.password_hash
    assert first.password_salt != second.password_salt


def test_empty_password_is_rejected():
    with pytest.raises(ValueError):
        PasswordHasher.hash_password("")


def test_legacy_pbkdf2_label_still_verifies():
    stored = PasswordHasher.hash_password("x", iterations=1_000)

    assert PasswordHasher.verify_password("x", stored._replace(algo="pbkdf2"))


def test_unknown_algorithm_never_verifies():
    stored = PasswordHasher.hash_password("x", iterations=1_000)

    assert not PasswordHasher.verify_password("x", stored._replace(algo="md5"))


def test_corrupted_columns_never_verify():
    stored = PasswordHasher.hash_password("x", iterations=1_000)

    assert not PasswordHasher.verify_password("x", stored._replace(password_salt="%%%not-base64%%%"))
    assert not PasswordHasher.verify_password("x", stored._replace(iterations=0))

