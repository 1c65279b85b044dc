import secrets

API_KEY_PREFIX = "ml_"


def generate_api_key() -> str:
    """Generate a random, URL-safe API key."""
    return API_KEY_PREFIX + secrets.token_urlsafe(32)
