"""
Exceptions for NameSilo DDNS.

Every failure in a run is fatal. Errors are raised where they happen and
carry the name of the stage they failed in once the updater catches them.

Exception hierarchy::

    DDNSError
    ├─ TransportError     - network failure or non-2xx HTTP status
    ├─ DecodeError        - response body is not the expected JSON
    ├─ APIError           - NameSilo reply code is not 300
    ├─ ConfigError        - missing or invalid input
    └─ EmptyResultError   - IP discovery returned nothing
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class DDNSError(Exception):
    """
    Base class for all NameSilo DDNS errors.

    Attributes
    ----------
    message : str
        Human-readable error message.
    stage : str | None
        The update stage the error surfaced in, if known.
    """

    def __init__(self, message: str, stage: str | None = None) -> None:
        self.message = message
        self.stage = stage
        super().__init__(message)


class TransportError(DDNSError):
    """Network request failed or returned a non-success HTTP status."""


class DecodeError(DDNSError):
    """Response body could not be decoded into the expected shape."""


class APIError(DDNSError):
    """
    NameSilo replied with a code other than 300.

    Attributes
    ----------
    code : int
        The provider reply code.
    detail : str
        The provider-supplied detail text.
    """

    def __init__(
        self,
        code: int,
        detail: str,
        stage: str | None = None,
    ) -> None:
        """
        Initialize APIError.

        Parameters
        ----------
        code : int
            The provider reply code.
        detail : str
            The provider-supplied detail text.
        stage : str | None, optional
            The update stage the error surfaced in.
        """
        self.code = code
        self.detail = detail
        super().__init__(f"API response error: {detail} (code {code})", stage)


class ConfigError(DDNSError):
    """
    Configuration is missing required values or contains invalid ones.

    Attributes
    ----------
    config_path : Path | None
        Path to the configuration file involved, if any.
    """

    def __init__(self, message: str, config_path: Path | None = None) -> None:
        self.config_path = config_path
        super().__init__(message)


class EmptyResultError(DDNSError):
    """IP discovery returned an empty value."""
