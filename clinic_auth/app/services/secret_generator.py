"""
Secret Generator

CSPRNG-backed opaque secrets. There is no failure path: if the OS random
source is unavailable the process cannot issue credentials at all.
"""

import secrets

TOKEN_BYTES = 32
DEFAULT_TEMP_PASSWORD_LENGTH = 20


def new_opaque_token() -> str:
    """32 random bytes, URL-safe base64 without padding (43 chars)"""
    return secrets.token_urlsafe(TOKEN_BYTES)


def new_temporary_password(length: int = DEFAULT_TEMP_PASSWORD_LENGTH) -> str:
    """
    Prefix of a fresh opaque token.

    The result is a password: it must go through password validation and
    CredentialHasher.hash_password, never through hash_token.
    """
    return new_opaque_token()[:length]
