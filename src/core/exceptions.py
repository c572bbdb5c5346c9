"""Exceptions raised by the client.

Parse and conversion faults are not wrapped: they surface as
`pydantic.ValidationError` exactly as the JSON engine raised them.
"""


class ClientError(Exception):
    """Base exception for all client errors."""


class SerializerConfigurationError(ClientError):
    """
    Raised when a serializer is built with an unsupported contract resolver.

    The serializer only works with `ClientContractResolver` (or a subclass);
    the check runs while the formatting profiles are built, so a bad resolver
    fails at construction time instead of on the first request.
    """


class TransportError(ClientError):
    """
    Raised when the HTTP layer fails before any response was received.

    This can occur due to:
    - Connection refused / DNS failures
    - Timeouts
    - Protocol errors
    """
