from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class JobStatus(str, Enum):
    PROCESSING = "PROCESSING"
    QUEUED = "QUEUED"
    DONE = "DONE"
    FAIL = "FAIL"


TERMINAL_STATUSES = frozenset({JobStatus.DONE.value, JobStatus.FAIL.value})


def is_terminal(status: Union[JobStatus, str, None]) -> bool:
    """
    DONE and FAIL end a job. Anything else, including a status string this
    client does not know about, is treated as still running.
    """
    if isinstance(status, JobStatus):
        return status.value in TERMINAL_STATUSES
    return str(status or "").upper() in TERMINAL_STATUSES


class _Snapshot(BaseModel):
    # Snapshots are replaced on every fetch, never updated in place.
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class ImagineResponse(_Snapshot):
    """Job handle returned by every submission endpoint"""
    messageId: str = Field(validation_alias=AliasChoices("messageId", "id"))
    success: str = Field(default=JobStatus.QUEUED.value, validation_alias=AliasChoices("success", "status"))
    createdAt: Optional[str] = None
    error: Optional[str] = None

    @property
    def status(self) -> str:
        return self.success


class MessageResponse(_Snapshot):
    messageId: Optional[str] = Field(default=None, validation_alias=AliasChoices("messageId", "id"))
    prompt: Optional[str] = None
    originalUrl: Optional[str] = None
    uri: Optional[str] = None
    progress: float = Field(default=0, ge=0, le=100)
    status: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    buttons: Optional[list[str]] = None
    originatingMessageId: Optional[str] = None
    ref: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return is_terminal(self.status)

    @field_validator("progress", mode="before")
    @classmethod
    def default_progress(cls, value: Any) -> Any:
        # QUEUED jobs may report progress as null
        return 0 if value is None else value


class VideoMessageResponse(_Snapshot):
    messageId: Optional[str] = Field(default=None, validation_alias=AliasChoices("messageId", "id"))
    prompt: Optional[str] = None
    progress: float = Field(default=0, ge=0, le=100)
    status: str
    videoUrl: Optional[str] = None
    videoUrls: Optional[list[str]] = None
    results: Optional[list[Any]] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    originatingMessageId: Optional[str] = None
    ref: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return is_terminal(self.status)

    @field_validator("progress", mode="before")
    @classmethod
    def default_progress(cls, value: Any) -> Any:
        # QUEUED jobs may report progress as null
        return 0 if value is None else value


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: Union[str, list[str], None] = None
    error: Optional[str] = None
    statusCode: Optional[int] = None
