"""
Data models for NameSilo DDNS.

This module defines the record types accepted on the command line and the
models for the JSON envelope returned by the NameSilo DNS API.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from typing import Any, Final


# Reply code NameSilo uses to signal success for every operation
SUCCESS_CODE: Final[int] = 300


class RecordType(StrEnum):
    """
    Supported DNS record types.

    Attributes
    ----------
    A : str
        IPv4 address record.
    AAAA : str
        IPv6 address record.
    CNAME : str
        Canonical name (alias) record.
    TXT : str
        Text record.
    """

    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    TXT = "TXT"


class DNSRecord(BaseModel):
    """
    A DNS resource record as listed by NameSilo.

    Attributes
    ----------
    record_id : str
        The provider's record identifier.
    type : str
        The record type. Kept as a plain string because the zone may
        contain types this tool does not manage (MX, SRV, ...).
    host : str
        The fully qualified host name (e.g., "home.example.com").
    value : str
        The record value.
    ttl : str
        Time to live, as reported by the provider.
    distance : int
        Record priority (MX distance), 0 when not applicable.
    """

    model_config = ConfigDict(frozen=True)

    record_id: str
    type: str
    host: str
    value: str = ""
    ttl: str = ""
    distance: int = 0

    @field_validator("ttl", mode="before")
    @classmethod
    def _ttl_to_str(cls, value: Any) -> Any:
        # The API reports ttl as a string, but some replies carry a number.
        if isinstance(value, int):
            return str(value)
        return value


class RequestInfo(BaseModel):
    """Echo of the request, as returned by NameSilo."""

    operation: str = ""
    ip: str = ""


class Reply(BaseModel):
    """
    The reply part of a NameSilo API response.

    Attributes
    ----------
    code : int
        Provider reply code (300 means success, 0 when absent).
    detail : str
        Human-readable reply detail.
    record_id : str | None
        Record ID returned by add/update operations.
    resource_record : list[DNSRecord]
        Records returned by the list operation.
    """

    code: int = 0
    detail: str = ""
    record_id: str | None = None
    resource_record: list[DNSRecord] = Field(default_factory=list)

    @field_validator("resource_record", mode="before")
    @classmethod
    def _single_record_to_list(cls, value: Any) -> Any:
        # A zone holding exactly one record is returned as an object.
        if isinstance(value, dict):
            return [value]
        return value


class APIResponse(BaseModel):
    """
    Common envelope of every NameSilo API response.

    Attributes
    ----------
    request : RequestInfo
        Echo of the request operation and caller IP.
    reply : Reply
        The reply payload.
    """

    request: RequestInfo = Field(default_factory=RequestInfo)
    reply: Reply = Field(default_factory=Reply)

    @property
    def is_success(self) -> bool:
        """Whether the reply code is the success sentinel."""
        return self.reply.code == SUCCESS_CODE
