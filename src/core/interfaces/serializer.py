"""Serialization contracts.

Protocols instead of base classes: the HTTP adapters only need something
shaped like a serializer, so tests can hand in fakes without inheritance.
"""

from __future__ import annotations

import asyncio
from typing import IO, Any, Protocol, TypeVar, runtime_checkable

from core.domain.formatting import SerializationFormatting

T = TypeVar("T")


class ContractResolver(Protocol):
    """Maps Python types to and from their wire shape."""

    def dump(
        self,
        value: Any,
        *,
        type_: Any = None,
        indent: int | None = None,
        exclude_none: bool = True,
        exclude_defaults: bool = False,
    ) -> bytes:
        """Render `value` as UTF-8 JSON bytes."""

        ...

    def load(self, type_: type[T], data: bytes | str) -> T:
        """Parse JSON text into an instance of `type_`."""

        ...


@runtime_checkable
class ClientSerializer(Protocol):
    """Minimal contract the HTTP adapters rely on.

    Design rules:
    - Streams belong to the caller: implementations never close them.
    - A missing stream deserializes to the type's default value.
    """

    def serialize(
        self,
        value: Any,
        stream: IO[bytes],
        formatting: SerializationFormatting = SerializationFormatting.INDENTED,
    ) -> None: ...

    async def serialize_async(
        self,
        value: Any,
        stream: IO[bytes],
        formatting: SerializationFormatting = SerializationFormatting.INDENTED,
        cancel_event: asyncio.Event | None = None,
    ) -> None: ...

    def deserialize(
        self,
        type_: type[T],
        stream: IO[bytes] | None,
        *,
        swallow_errors: bool = False,
    ) -> T | None: ...

    async def deserialize_async(
        self,
        type_: type[T],
        stream: Any,
        cancel_event: asyncio.Event | None = None,
        *,
        swallow_errors: bool | None = None,
    ) -> T | None: ...
