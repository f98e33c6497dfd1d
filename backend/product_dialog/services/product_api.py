"""Send product create/update requests and capture the outcome."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from product_dialog.api.schemas.product import ProductPayload
from product_dialog.core.config import Settings, get_settings
from product_dialog.core.credentials import bearer_header

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/productos"
FALLBACK_ERROR = "Error al guardar el producto."


def product_request_target(product_id: Any = None) -> tuple[str, str]:
    """Return (method, path): POST to the collection or PUT to the item."""
    if product_id is None:
        return "POST", PRODUCTS_PATH
    return "PUT", f"{PRODUCTS_PATH}/{product_id}"


def _error_message(data: Any) -> str:
    """Server-provided message when there is one, generic text otherwise."""
    if isinstance(data, dict):
        message = data.get("message")
        if message:
            return str(message)
    return FALLBACK_ERROR


def save_product(
    payload: ProductPayload,
    product_id: Any = None,
    *,
    token: str | None = None,
    client: httpx.Client | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Create or update a product and return status metrics.

    Args:
        payload: Normalized body to send
        product_id: Identity of the edited record, None to create
        token: Bearer credential; the header is omitted when missing
        client: Optional pre-configured HTTP client (tests, shared pools)
        settings: Optional settings override

    Returns:
        Dictionary with:
            - status: HTTP status code or error string
            - response_time_ms: Response time in milliseconds
            - success: Boolean indicating if the save was accepted
            - error: Human-readable message if failed
            - data: Parsed response body, when there was one
    """
    settings = settings or get_settings()
    method, path = product_request_target(product_id)
    url = f"{settings.api_url}{path}"

    start_time = time.time()
    result: dict[str, Any] = {
        "status": None,
        "response_time_ms": None,
        "success": False,
        "error": None,
        "data": None,
    }

    try:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": settings.user_agent,
        }
        auth = bearer_header(token)
        if not auth:
            logger.warning(f"No bearer token available for {method} {path}")
        headers.update(auth)

        request_body = json.dumps(payload.model_dump())

        if client is None:
            with httpx.Client(
                timeout=settings.request_timeout, follow_redirects=True
            ) as owned_client:
                response = owned_client.request(
                    method, url, content=request_body, headers=headers
                )
        else:
            response = client.request(method, url, content=request_body, headers=headers)

        result["status"] = response.status_code
        # Body is parsed before the status is trusted, success included
        data = response.json()

        elapsed_ms = int((time.time() - start_time) * 1000)
        result["response_time_ms"] = elapsed_ms
        result["data"] = data
        result["success"] = 200 <= response.status_code < 300

        if not result["success"]:
            result["error"] = _error_message(data)

        logger.info(
            f"Product {method} {path}: status={result['status']}, "
            f"time={elapsed_ms}ms"
        )

    except httpx.TimeoutException as e:
        result["response_time_ms"] = int((time.time() - start_time) * 1000)
        result["status"] = "timeout"
        result["error"] = FALLBACK_ERROR
        logger.warning(f"Product {method} {path} timeout: {e}")

    except httpx.RequestError as e:
        result["response_time_ms"] = int((time.time() - start_time) * 1000)
        result["status"] = "error"
        result["error"] = FALLBACK_ERROR
        logger.error(f"Product {method} {path} request error: {e}", exc_info=True)

    except ValueError as e:
        # Response body was not JSON; the status is known but unusable
        result["response_time_ms"] = int((time.time() - start_time) * 1000)
        result["success"] = False
        result["error"] = FALLBACK_ERROR
        logger.warning(f"Product {method} {path} returned malformed JSON: {e}")

    except Exception as e:
        result["response_time_ms"] = int((time.time() - start_time) * 1000)
        result["status"] = "error"
        result["error"] = FALLBACK_ERROR
        logger.error(f"Product {method} {path} unexpected error: {e}", exc_info=True)

    return result
