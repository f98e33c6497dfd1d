"""Bearer token providers injected into the form controller."""

from __future__ import annotations

from collections.abc import Callable

from product_dialog.core.config import Settings, get_settings

TokenProvider = Callable[[], "str | None"]


def static_token(token: str | None) -> TokenProvider:
    """Return a provider that always yields the same token."""

    def _provide() -> str | None:
        return token

    return _provide


def settings_token_provider(settings: Settings | None = None) -> TokenProvider:
    """Read the token from settings at call time (PRODUCT_API_TOKEN)."""

    def _provide() -> str | None:
        current = settings or get_settings()
        return current.api_token or None

    return _provide


def bearer_header(token: str | None) -> dict[str, str]:
    """Build the Authorization header, empty when no token is available."""
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}
