"""The serializer the client uses to write requests and read responses.

Rules:
- Two output profiles (compact, indented) are built once per instance and
  never mutated, so one instance can serve concurrent requests.
- Output is UTF-8 without BOM. Streams belong to the caller: they are
  flushed, never closed or re-positioned.
- Nulls are omitted on write, default-valued fields are always written.
  Partial updates on the server treat "absent" as "leave unchanged".

Failure policy:
- Write path: nothing is caught.
- `deserialize`: parse/convert faults propagate (`pydantic.ValidationError`).
- `deserialize_async`: any fault while reading or converting becomes the
  type's default value unless `swallow_errors=False` (or
  `ConnectionSettings.swallow_async_errors` is off).
  A caller on that path cannot tell "empty" from "unparseable".
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from dataclasses import dataclass
from typing import IO, Any, Generic, TypeVar

from core.config import ConnectionSettings, get_settings
from core.domain.formatting import SerializationFormatting
from core.exceptions import SerializerConfigurationError
from core.interfaces.serializer import ContractResolver
from core.serialization.resolver import ClientContractResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")

_VALUE_TYPE_DEFAULTS: dict[Any, Any] = {
    int: 0,
    float: 0.0,
    bool: False,
    complex: 0j,
}


def default_value(type_: Any) -> Any:
    """Zero value for numeric/bool types, None for everything else."""

    try:
        return _VALUE_TYPE_DEFAULTS.get(type_)
    except TypeError:
        return None


@dataclass(frozen=True)
class SerializerSettings:
    """One output profile, as produced by `InternalSerializer.create_settings`."""

    formatting: SerializationFormatting
    contract_resolver: ContractResolver
    exclude_defaults: bool = False
    exclude_none: bool = True

    @property
    def indent(self) -> int | None:
        return self.formatting.indent()


@dataclass(frozen=True)
class DeserializeResult(Generic[T]):
    """Outcome of one load: the value, or the default plus the fault."""

    value: T | None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _raise_if_cancelled(cancel_event: asyncio.Event | threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise asyncio.CancelledError()


async def _read_async(stream: Any) -> bytes | str:
    aread = getattr(stream, "aread", None)
    if aread is not None and inspect.iscoroutinefunction(aread):
        return await aread()
    if inspect.iscoroutinefunction(stream.read):
        return await stream.read()
    return await asyncio.to_thread(stream.read)


class InternalSerializer:
    """JSON serializer built on `ClientContractResolver`.

    `contract_resolver` is injectable, but it must be a
    `ClientContractResolver`; anything else raises
    `SerializerConfigurationError` from the constructor.
    """

    # Chunk size used when copying the rendered body to the request stream.
    buffer_size = 1024

    def __init__(
        self,
        settings: ConnectionSettings | None = None,
        contract_resolver: ContractResolver | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._contract_resolver = (
            contract_resolver
            if contract_resolver is not None
            else ClientContractResolver(self._settings)
        )

        self._compact = self.create_settings(SerializationFormatting.NONE)
        self._indented = self.create_settings(SerializationFormatting.INDENTED)

    @property
    def settings(self) -> ConnectionSettings:
        return self._settings

    @property
    def contract_resolver(self) -> ClientContractResolver:
        return self._contract_resolver

    def create_settings(self, formatting: SerializationFormatting) -> SerializerSettings:
        profile = SerializerSettings(
            formatting=SerializationFormatting(formatting),
            contract_resolver=self._contract_resolver,
            exclude_defaults=False,
            exclude_none=True,
        )
        if not isinstance(profile.contract_resolver, ClientContractResolver):
            raise SerializerConfigurationError(
                f"InternalSerializer needs an instance of {ClientContractResolver.__name__} "
                f"as contract resolver, got {type(profile.contract_resolver).__name__}"
            )
        return profile

    def _profile(self, formatting: SerializationFormatting | str) -> SerializerSettings:
        if SerializationFormatting(formatting) is SerializationFormatting.INDENTED:
            return self._indented
        return self._compact

    def serialize(
        self,
        value: Any,
        stream: IO[bytes],
        formatting: SerializationFormatting = SerializationFormatting.INDENTED,
    ) -> None:
        profile = self._profile(formatting)
        payload = profile.contract_resolver.dump(
            value,
            indent=profile.indent,
            exclude_none=profile.exclude_none,
            exclude_defaults=profile.exclude_defaults,
        )
        for start in range(0, len(payload), self.buffer_size):
            stream.write(payload[start : start + self.buffer_size])
        stream.flush()

    async def serialize_async(
        self,
        value: Any,
        stream: IO[bytes],
        formatting: SerializationFormatting = SerializationFormatting.INDENTED,
        cancel_event: asyncio.Event | threading.Event | None = None,
    ) -> None:
        """Same contract as `serialize`; the write itself is blocking."""

        _raise_if_cancelled(cancel_event)
        self.serialize(value, stream, formatting)

    def deserialize(
        self,
        type_: type[T],
        stream: IO[bytes] | None,
        *,
        swallow_errors: bool = False,
    ) -> T | None:
        if stream is None:
            return default_value(type_)
        try:
            data = stream.read()
        except Exception as exc:
            result: DeserializeResult[T] = DeserializeResult(default_value(type_), exc)
        else:
            result = self._load(type_, data)
        return self._unwrap(type_, result, swallow_errors)

    async def deserialize_async(
        self,
        type_: type[T],
        stream: Any,
        cancel_event: asyncio.Event | threading.Event | None = None,
        *,
        swallow_errors: bool | None = None,
    ) -> T | None:
        """Asynchronous deserialize.

        `stream` may expose a coroutine `read()`/`aread()` (awaited) or a
        blocking `read()` (run in a worker thread). Cancellation is only
        checked before reading starts.
        """

        if stream is None:
            return default_value(type_)
        _raise_if_cancelled(cancel_event)

        if swallow_errors is None:
            swallow_errors = self._settings.swallow_async_errors

        try:
            data = await _read_async(stream)
        except Exception as exc:
            result: DeserializeResult[T] = DeserializeResult(default_value(type_), exc)
        else:
            result = self._load(type_, data)
        return self._unwrap(type_, result, swallow_errors)

    def _load(self, type_: type[T], data: bytes | str | None) -> DeserializeResult[T]:
        if not data or not data.strip():
            return DeserializeResult(default_value(type_))
        try:
            value = self._compact.contract_resolver.load(type_, data)
        except Exception as exc:
            return DeserializeResult(default_value(type_), exc)
        return DeserializeResult(value)

    @staticmethod
    def _unwrap(type_: Any, result: DeserializeResult[T], swallow_errors: bool) -> T | None:
        if result.ok:
            return result.value
        if not swallow_errors:
            raise result.error
        logger.warning(
            "Could not deserialize %s, returning default value: %s",
            getattr(type_, "__name__", type_),
            result.error,
        )
        return result.value
