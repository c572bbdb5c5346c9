"""JSON serialization for requests and responses."""

from core.serialization.resolver import ClientContractResolver
from core.serialization.serializer import (
    DeserializeResult,
    InternalSerializer,
    SerializerSettings,
    default_value,
)

__all__ = [
    "ClientContractResolver",
    "DeserializeResult",
    "InternalSerializer",
    "SerializerSettings",
    "default_value",
]
