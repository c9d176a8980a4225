import os

server_mode = os.getenv("SERVER_MODE", "development")
"""The operational mode of the server."""

database_url = os.getenv("DATABASE_URL", "sqlite://db.sqlite3")
"""The tortoise database url."""

admin_api_key = os.getenv("ADMIN_API_KEY", "admin-dev-key")
"""The pre-shared key granting the ADMIN role."""

user_api_key = os.getenv("USER_API_KEY", "user-dev-key")
"""The pre-shared key granting the USER role."""

api_root = "/api"
"""The base url for the api."""

docs_root = api_root + "/docs"
"""The base url for the api documentation, which is not gated by an api key."""

api_key_header = "X-API-KEY"
"""The header the api key is transported in."""


def _split(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


cors_allowed_origins = _split(os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"))
"""The origins allowed to make cross origin requests."""

cors_allowed_methods = _split(os.getenv("CORS_ALLOWED_METHODS", "GET,POST,PATCH,DELETE,OPTIONS"))
"""The methods allowed on cross origin requests."""

cors_allowed_headers = _split(os.getenv("CORS_ALLOWED_HEADERS", f"{api_key_header},Content-Type"))
"""The headers allowed on cross origin requests."""

sentry_dsn = os.getenv("SENTRY_DSN", None)
"""The sentry dsn. Exception tracking is disabled when missing."""
