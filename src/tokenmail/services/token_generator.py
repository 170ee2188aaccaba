import secrets
import string

TOKEN_ALPHABET = string.ascii_letters + string.digits
DEFAULT_TOKEN_LENGTH = 8


def generate_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    """Return a random alphanumeric token of exactly ``length`` characters."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))
