from __future__ import annotations

import logging

import httpx

from cashbook.core.config import settings
from cashbook.client.errors import NetworkFailure, NotFound
from cashbook.schemas.transaction import TxCreate, TxUpdate, TxOut, DeleteOut

log = logging.getLogger(__name__)


class TransactionsClient:
    """Async client for the ``/transactions`` REST surface.

    Requests have no timeout: a hung call only blocks the awaiting caller.
    """

    def __init__(self, base_url: str | None = None, *, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = (base_url or settings.cashbook_api_url).rstrip("/")
        self._http = httpx.AsyncClient(timeout=None, transport=transport)

    async def __aenter__(self) -> TransactionsClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            r = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise NetworkFailure(f"{method} {url} failed: {e}") from e

        if r.status_code == 404:
            raise NotFound(f"{method} {url} -> 404", status_code=404)
        if r.is_error:
            raise NetworkFailure(f"{method} {url} -> {r.status_code}", status_code=r.status_code)
        return r

    async def list_transactions(self) -> list[TxOut]:
        r = await self._request("GET", self.base_url)
        return [TxOut.model_validate(row) for row in r.json()]

    async def create_transaction(self, body: TxCreate) -> TxOut:
        r = await self._request("POST", self.base_url, json=body.model_dump(mode="json", by_alias=True))
        return TxOut.model_validate(r.json())

    async def update_transaction(self, tx_id: int, body: TxUpdate) -> TxOut:
        payload = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        r = await self._request("PUT", f"{self.base_url}/{tx_id}", json=payload)
        return TxOut.model_validate(r.json())

    async def delete_transaction(self, tx_id: int) -> DeleteOut:
        r = await self._request("DELETE", f"{self.base_url}/{tx_id}")
        return DeleteOut.model_validate(r.json())

    async def delete_all_transactions(self) -> DeleteOut:
        r = await self._request("DELETE", self.base_url)
        return DeleteOut.model_validate(r.json())
