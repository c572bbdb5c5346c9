"""Snapshot repository calls.

Only the verify-repository endpoint lives here:
- `POST /_snapshot/<repository>/_verify`
- The body goes through the serializer; call metadata is attached afterwards.
"""

from __future__ import annotations

import io
import logging
from contextlib import nullcontext
from urllib.parse import quote

import httpx

from adapters.http_client import build_async_client, build_client
from core.config import ConnectionSettings, get_settings
from core.domain.models import ApiCallDetails, ServerError, VerifyRepositoryResponse
from core.exceptions import TransportError
from core.interfaces.serializer import ClientSerializer
from core.serialization import InternalSerializer

logger = logging.getLogger(__name__)


def _verify_path(repository: str) -> str:
    name = (repository or "").strip()
    if not name:
        raise ValueError("repository name is required")
    return f"/_snapshot/{quote(name, safe='')}/_verify"


def _body_stream(response: httpx.Response) -> io.BytesIO | None:
    return io.BytesIO(response.content) if response.content else None


def _api_call(response: httpx.Response) -> ApiCallDetails:
    return ApiCallDetails(
        method=response.request.method,
        url=str(response.request.url),
        status_code=response.status_code,
        success=response.is_success,
    )


class SnapshotClient:
    """Verify snapshot repositories against a cluster.

    `client`/`async_client` are optional shared httpx clients; when absent a
    short-lived one is built per call.
    """

    def __init__(
        self,
        settings: ConnectionSettings | None = None,
        *,
        serializer: ClientSerializer | None = None,
        client: httpx.Client | None = None,
        async_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._serializer = serializer or InternalSerializer(self._settings)
        self._client = client
        self._async_client = async_client

    @property
    def serializer(self) -> ClientSerializer:
        return self._serializer

    def verify_repository(self, repository: str) -> VerifyRepositoryResponse:
        path = _verify_path(repository)
        logger.debug("POST %s", path)

        owned = nullcontext(self._client) if self._client is not None else build_client(self._settings)
        try:
            with owned as client:
                response = client.post(path)
        except httpx.HTTPError as exc:
            raise TransportError(f"POST {path} failed: {exc}") from exc

        if not response.is_success:
            error = self._serializer.deserialize(
                ServerError, _body_stream(response), swallow_errors=True
            )
            return self._failed(response, error)

        parsed = self._serializer.deserialize(VerifyRepositoryResponse, _body_stream(response))
        return self._succeeded(response, parsed)

    async def verify_repository_async(self, repository: str) -> VerifyRepositoryResponse:
        path = _verify_path(repository)
        logger.debug("POST %s (async)", path)

        owned = (
            nullcontext(self._async_client)
            if self._async_client is not None
            else build_async_client(self._settings)
        )
        try:
            async with owned as client:
                response = await client.post(path)
        except httpx.HTTPError as exc:
            raise TransportError(f"POST {path} failed: {exc}") from exc

        if not response.is_success:
            error = await self._serializer.deserialize_async(
                ServerError, _body_stream(response), swallow_errors=True
            )
            return self._failed(response, error)

        parsed = await self._serializer.deserialize_async(
            VerifyRepositoryResponse, _body_stream(response)
        )
        return self._succeeded(response, parsed)

    @staticmethod
    def _succeeded(
        response: httpx.Response,
        parsed: VerifyRepositoryResponse | None,
    ) -> VerifyRepositoryResponse:
        result = parsed if parsed is not None else VerifyRepositoryResponse()
        result.api_call = _api_call(response)
        return result

    @staticmethod
    def _failed(response: httpx.Response, error: ServerError | None) -> VerifyRepositoryResponse:
        logger.warning(
            "Verify repository failed: HTTP %s %s",
            response.status_code,
            response.request.url,
        )
        result = VerifyRepositoryResponse()
        result.api_call = _api_call(response)
        result.server_error = error if error is not None else ServerError(status=response.status_code)
        return result
