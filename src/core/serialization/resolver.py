"""Contract resolver backed by pydantic `TypeAdapter`.

Responsibility:
- Decide how a Python type maps to its wire shape (aliases, nested models).
- Keep one adapter per type; building a core schema is the expensive part.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, TypeVar

from pydantic import TypeAdapter

from core.config import ConnectionSettings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClientContractResolver:
    """The resolver `InternalSerializer` requires.

    Dumps always go through aliases so wire names stay stable regardless of
    the Python attribute names.
    """

    def __init__(self, settings: ConnectionSettings | None = None) -> None:
        self._settings = settings or get_settings()
        self._adapters: dict[Any, TypeAdapter[Any]] = {}
        self._lock = threading.Lock()

    @property
    def settings(self) -> ConnectionSettings:
        return self._settings

    def adapter_for(self, type_: Any) -> TypeAdapter[Any]:
        try:
            cached = self._adapters.get(type_)
        except TypeError:
            # Unhashable annotations are rare; build them every time.
            return TypeAdapter(type_)
        if cached is not None:
            return cached

        adapter = TypeAdapter(type_)
        with self._lock:
            cached = self._adapters.setdefault(type_, adapter)
        logger.debug("Built type adapter for %r", type_)
        return cached

    def dump(
        self,
        value: Any,
        *,
        type_: Any = None,
        indent: int | None = None,
        exclude_none: bool = True,
        exclude_defaults: bool = False,
    ) -> bytes:
        adapter = self.adapter_for(type_ if type_ is not None else type(value))
        return adapter.dump_json(
            value,
            indent=indent,
            by_alias=True,
            exclude_none=exclude_none,
            exclude_defaults=exclude_defaults,
        )

    def load(self, type_: type[T], data: bytes | str) -> T:
        return self.adapter_for(type_).validate_json(
            data, strict=self._strict()
        )

    def _strict(self) -> bool | None:
        # None defers to each model's own config.
        return True if self._settings.strict_deserialization else None
