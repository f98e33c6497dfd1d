"""Shared fixtures: a fake product service reached through FastAPI's TestClient."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.testclient import TestClient

from product_dialog.core.config import Settings
from product_dialog.core.credentials import static_token

API_URL = "http://testserver/api"
TOKEN = "tok-123"


class FakeProductService:
    """Records every write and answers with a canned or echo response."""

    def __init__(self):
        self.requests: list[dict[str, Any]] = []
        self.reply: tuple[int, Any] | None = None

    def build_app(self) -> FastAPI:
        app = FastAPI()

        @app.post("/api/productos")
        async def create_product(request: Request):
            return await self._handle(request, None)

        @app.put("/api/productos/{product_id}")
        async def update_product(product_id: str, request: Request):
            return await self._handle(request, product_id)

        return app

    async def _handle(self, request: Request, product_id: str | None):
        body = await request.json()
        self.requests.append(
            {
                "method": request.method,
                "path": request.url.path,
                "headers": dict(request.headers),
                "body": body,
                "product_id": product_id,
            }
        )
        if self.reply is not None:
            status_code, content = self.reply
            if isinstance(content, str):
                return PlainTextResponse(content, status_code=status_code)
            return JSONResponse(content, status_code=status_code)
        if product_id is None:
            return JSONResponse({"id": 101, **body}, status_code=201)
        return JSONResponse({"id": int(product_id), **body}, status_code=200)


class Callbacks:
    def __init__(self):
        self.closed = 0
        self.succeeded = 0

    def on_close(self):
        self.closed += 1

    def on_success(self):
        self.succeeded += 1


@pytest.fixture
def settings() -> Settings:
    return Settings(api_url=API_URL, api_token=None, request_timeout=5.0)


@pytest.fixture
def service() -> FakeProductService:
    return FakeProductService()


@pytest.fixture
def client(service: FakeProductService) -> TestClient:
    return TestClient(service.build_app())


@pytest.fixture
def callbacks() -> Callbacks:
    return Callbacks()


@pytest.fixture
def make_controller(client, callbacks, settings):
    """Build a controller wired to the fake service (or a custom client)."""
    from product_dialog.services.form_controller import FormController

    def _make(record=None, categories=None, http_client=None, token=TOKEN):
        return FormController(
            record,
            categories or [],
            on_close=callbacks.on_close,
            on_success=callbacks.on_success,
            token_provider=static_token(token),
            client=http_client or client,
            settings=settings,
        )

    return _make


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


RECORD_A = {
    "id": 7,
    "codigo_sku": "CAF-250",
    "nombre": "Café molido 250g",
    "descripcion": "Tueste medio",
    "precio_unitario": 4500,
    "stock": "No",
    "imagen_url": "https://ejemplo.com/cafe.jpg",
    "categoria": "Almacén",
    "controla_stock": True,
    "stock_cantidad": 12.5,
}

RECORD_B = {
    "id": 9,
    "codigo_sku": "QSO-1",
    "nombre": "Queso cremoso",
    "descripcion": "",
    "precio_unitario": "8900.50",
    "stock": "Sí",
    "imagen_url": None,
    "categoria": "Lácteos",
    "controla_stock": False,
    "stock_cantidad": 0,
}
