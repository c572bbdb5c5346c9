"""
Unit tests for core.serialization.serializer - asynchronous paths

The async deserialize path returns the type's default value on parse and
conversion faults (logged at WARNING) unless told otherwise; these tests pin
that policy and its opt-out.
"""

import asyncio
import io
import logging

import pytest
from pydantic import BaseModel, ValidationError, field_validator

from core.config import ConnectionSettings
from core.domain.formatting import SerializationFormatting
from core.domain.models import CompactNodeInfo, VerifyRepositoryResponse
from core.serialization import InternalSerializer


class AsyncBody:
    """Minimal stream with a coroutine `read()`."""

    def __init__(self, data: bytes):
        self._data = data
        self.reads = 0

    async def read(self) -> bytes:
        self.reads += 1
        await asyncio.sleep(0)
        return self._data


class NodeRole(BaseModel):
    role: str

    @field_validator("role")
    @classmethod
    def _expand(cls, value: str) -> str:
        return {"m": "master", "d": "data"}[value]


class BrokenBody:
    def read(self) -> bytes:
        raise OSError("connection reset")


# ============================================================================
# serialize_async
# ============================================================================


class TestSerializeAsync:
    @pytest.mark.asyncio
    async def test_writes_same_bytes_as_sync(self, serializer):
        value = VerifyRepositoryResponse(nodes={"n1": CompactNodeInfo(name="node-1")})
        sync_stream, async_stream = io.BytesIO(), io.BytesIO()

        serializer.serialize(value, sync_stream, SerializationFormatting.NONE)
        await serializer.serialize_async(value, async_stream, SerializationFormatting.NONE)

        assert async_stream.getvalue() == sync_stream.getvalue()

    @pytest.mark.asyncio
    async def test_cancelled_before_start_writes_nothing(self, serializer):
        cancel = asyncio.Event()
        cancel.set()
        stream = io.BytesIO()

        with pytest.raises(asyncio.CancelledError):
            await serializer.serialize_async(
                VerifyRepositoryResponse(), stream, cancel_event=cancel
            )
        assert stream.getvalue() == b""


# ============================================================================
# deserialize_async
# ============================================================================


class TestDeserializeAsync:
    @pytest.mark.asyncio
    async def test_blocking_stream(self, serializer):
        response = await serializer.deserialize_async(
            VerifyRepositoryResponse, io.BytesIO(b'{"nodes": {"Xy": {"name": "a"}}}')
        )
        assert response == VerifyRepositoryResponse(nodes={"Xy": CompactNodeInfo(name="a")})

    @pytest.mark.asyncio
    async def test_coroutine_stream_is_awaited(self, serializer):
        body = AsyncBody(b'{"nodes": {}}')
        response = await serializer.deserialize_async(VerifyRepositoryResponse, body)
        assert body.reads == 1
        assert response is not None
        assert response.nodes == {}

    @pytest.mark.asyncio
    async def test_asyncio_stream_reader(self, serializer):
        reader = asyncio.StreamReader()
        reader.feed_data(b"17")
        reader.feed_eof()
        assert await serializer.deserialize_async(int, reader) == 17

    @pytest.mark.asyncio
    async def test_absent_stream_returns_default(self, serializer):
        assert await serializer.deserialize_async(VerifyRepositoryResponse, None) is None
        assert await serializer.deserialize_async(int, None) == 0

    @pytest.mark.asyncio
    async def test_malformed_json_returns_default(self, serializer, caplog):
        with caplog.at_level(logging.WARNING, logger="core.serialization.serializer"):
            result = await serializer.deserialize_async(
                VerifyRepositoryResponse, io.BytesIO(b"{not json")
            )
        assert result is None
        assert "VerifyRepositoryResponse" in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_json_raises_on_sync_path(self, serializer):
        with pytest.raises(ValidationError):
            serializer.deserialize(VerifyRepositoryResponse, io.BytesIO(b"{not json"))

    @pytest.mark.asyncio
    async def test_shape_mismatch_returns_default_for_value_type(self, serializer):
        assert await serializer.deserialize_async(int, io.BytesIO(b'"abc"')) == 0

    @pytest.mark.asyncio
    async def test_read_failure_returns_default(self, serializer):
        assert await serializer.deserialize_async(VerifyRepositoryResponse, BrokenBody()) is None

    @pytest.mark.asyncio
    async def test_explicit_opt_out_raises(self, serializer):
        with pytest.raises(ValidationError):
            await serializer.deserialize_async(
                VerifyRepositoryResponse, io.BytesIO(b"{not json"), swallow_errors=False
            )

    @pytest.mark.asyncio
    async def test_settings_opt_out_raises(self):
        settings = ConnectionSettings(_env_file=None, swallow_async_errors=False)
        serializer = InternalSerializer(settings)
        with pytest.raises(ValidationError):
            await serializer.deserialize_async(VerifyRepositoryResponse, io.BytesIO(b"[1"))

    @pytest.mark.asyncio
    async def test_cancelled_before_start_does_not_read(self, serializer):
        cancel = asyncio.Event()
        cancel.set()
        body = AsyncBody(b"{}")

        with pytest.raises(asyncio.CancelledError):
            await serializer.deserialize_async(VerifyRepositoryResponse, body, cancel_event=cancel)
        assert body.reads == 0


# ============================================================================
# Faults raised outside pydantic's error wrapping
# ============================================================================


class TestValidatorFaults:
    @pytest.mark.asyncio
    async def test_validator_key_error_returns_default(self, serializer):
        result = await serializer.deserialize_async(NodeRole, io.BytesIO(b'{"role": "zzz"}'))
        assert result is None

    @pytest.mark.asyncio
    async def test_validator_key_error_with_opt_out_raises(self, serializer):
        with pytest.raises(KeyError):
            await serializer.deserialize_async(
                NodeRole, io.BytesIO(b'{"role": "zzz"}'), swallow_errors=False
            )

    def test_validator_key_error_raises_on_sync_path(self, serializer):
        with pytest.raises(KeyError):
            serializer.deserialize(NodeRole, io.BytesIO(b'{"role": "zzz"}'))

    @pytest.mark.asyncio
    async def test_valid_value_still_converts(self, serializer):
        result = await serializer.deserialize_async(NodeRole, io.BytesIO(b'{"role": "d"}'))
        assert result is not None
        assert result.role == "data"
