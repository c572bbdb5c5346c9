"""Domain models (Pydantic v2).

These models describe *what* the cluster answers, not *how* it is fetched:
the HTTP adapters attach call metadata after decoding.

Notes:
- Call metadata (`api_call`, `server_error`) never travels on the wire.
- Mapping keys coming from the cluster (node ids) are kept verbatim.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class ApiCallDetails(BaseModel):
    """Describes the HTTP call that produced a response."""

    method: str = Field(
        ...,
        min_length=1,
        description="HTTP method used for the call.",
    )
    url: str = Field(
        ...,
        description="Absolute URL that was requested.",
    )
    status_code: int | None = Field(
        default=None,
        description="HTTP status returned by the node (None if no response).",
    )
    success: bool = Field(
        default=False,
        description="True when the node answered with a 2xx status.",
    )


class ErrorCause(BaseModel):
    """Type and reason of a server-side failure; extra keys are kept."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    reason: str | None = None


class ServerError(BaseModel):
    """Error body returned by the cluster on a non-2xx answer."""

    model_config = ConfigDict(extra="ignore")

    error: ErrorCause | None = None
    status: int | None = None

    @field_validator("error", mode="before")
    @classmethod
    def _wrap_plain_reason(cls, value: Any) -> Any:
        # Older nodes answer {"error": "reason text", "status": 404}.
        if isinstance(value, str):
            return {"reason": value}
        return value


class ResponseBase(BaseModel):
    """Common base for every decoded response."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    api_call: ApiCallDetails | None = Field(
        default=None,
        exclude=True,
        description="Metadata of the HTTP call (attached by the client, not decoded).",
    )
    server_error: ServerError | None = Field(
        default=None,
        exclude=True,
        description="Decoded error body when the call failed.",
    )

    @property
    def is_valid(self) -> bool:
        if self.server_error is not None:
            return False
        if self.api_call is None:
            return True
        return self.api_call.success


class CompactNodeInfo(BaseModel):
    """Compact description of one cluster node."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(
        default=None,
        description="Human readable node name.",
    )


class VerifyRepositoryResponse(ResponseBase):
    """Result of verifying a snapshot repository.

    `nodes` maps node id to node info for every node that verified the
    repository. It is never None: a missing or null key decodes to `{}`.
    """

    nodes: dict[str, CompactNodeInfo] = Field(
        default_factory=dict,
        alias="nodes",
        description="Node id => node info of the nodes that verified the repository.",
    )

    @field_validator("nodes", mode="before")
    @classmethod
    def _null_nodes_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value
