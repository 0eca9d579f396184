import secrets

TOKEN_BYTES = 16


def generate_random_token(nbytes: int = TOKEN_BYTES) -> str:
    """Opaque, URL-safe identifier handed to wallet providers as the payment id."""
    return secrets.token_hex(nbytes)
