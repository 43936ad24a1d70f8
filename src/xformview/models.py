#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class TransformSpec(BaseModel):
    """The definition part of a transform job as stored by the cluster."""

    model_config = ConfigDict(extra="allow", frozen=True)

    transform_id: Optional[str] = None
    description: str = ""
    source_index: str
    target_index: str
    enabled: bool = False


class Transform(BaseModel):
    """A transform job.

    The object is owned by the remote system,
    we only ever hold a read-only copy of it.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    seq_no: Optional[int] = Field(default=None, alias="_seq_no")
    primary_term: Optional[int] = Field(default=None, alias="_primary_term")
    transform: TransformSpec

    @property
    def source_index(self) -> str:
        return self.transform.source_index

    @property
    def target_index(self) -> str:
        return self.transform.target_index

    @property
    def enabled(self) -> bool:
        return self.transform.enabled


class TransformPage(BaseModel):
    """One page of transforms as result of a list request."""

    model_config = ConfigDict(frozen=True)

    transforms: list[Transform] = Field(default_factory=list)
    total_transforms: int = Field(default=0, ge=0)
    # Opaque status metadata keyed by transform identifier
    metadata: dict[str, Any] = Field(default_factory=dict)


class ServerResponse(BaseModel, Generic[T]):
    """Outcome of a remote call: either `ok` with a `response` or an `error`."""

    ok: bool
    response: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, response: Any = None) -> "ServerResponse":
        return cls(ok=True, response=response)

    @classmethod
    def failure(cls, error: str) -> "ServerResponse":
        return cls(ok=False, error=error)
