"""
DDNS update orchestration.

A run goes through a fixed sequence of stages: resolve the record value,
list the domain's records, match the requested host, then add or update
the record and report the reply. The first error ends the run; nothing is
retried or rolled back.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from namesilo_ddns.errors import DDNSError
from namesilo_ddns.ip_resolver import get_public_ip
from namesilo_ddns.models import RecordType
from namesilo_ddns.records import find_record

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    import httpx

    from namesilo_ddns.config import RunConfig
    from namesilo_ddns.models import APIResponse, DNSRecord
    from namesilo_ddns.namesilo import NameSiloClient


class Stage(StrEnum):
    """Stages of an update run, in order."""

    RESOLVE_IP = "resolve_ip"
    LIST_RECORDS = "list_records"
    MATCH = "match"
    ADD = "add"
    UPDATE = "update"
    REPORT = "report"


class UpdateResult:
    """
    Result of an update run.

    Attributes
    ----------
    success : bool
        Whether the run completed.
    message : str
        Human-readable message.
    stage : Stage
        The last stage reached (the failing stage on error).
    action : str | None
        The action taken ("created", "updated").
    value : str | None
        The record value written.
    record_id : str | None
        The ID of the record written.
    response : APIResponse | None
        The reply of the write operation.
    error : DDNSError | None
        The error that ended the run.
    """

    def __init__(
        self,
        *,
        success: bool,
        message: str,
        stage: Stage,
        action: str | None = None,
        value: str | None = None,
        record_id: str | None = None,
        response: APIResponse | None = None,
        error: DDNSError | None = None,
    ) -> None:
        self.success = success
        self.message = message
        self.stage = stage
        self.action = action
        self.value = value
        self.record_id = record_id
        self.response = response
        self.error = error

    @property
    def exit_code(self) -> int:
        """Process exit code for this result."""
        return 0 if self.success else 1


class DDNSUpdater:
    """
    Runs one DDNS update.

    Parameters
    ----------
    config : RunConfig
        The run configuration.
    http_client : httpx.Client
        HTTP client used for IP discovery.
    api : NameSiloClient
        NameSilo API client.
    logger : logging.Logger
        Logger for progress and outcome.
    ip_resolver : Callable[..., str], optional
        Function returning the public IP, called as
        ``ip_resolver(http_client, ipv6=...)``.
    """

    def __init__(
        self,
        config: RunConfig,
        http_client: httpx.Client,
        api: NameSiloClient,
        logger: logging.Logger,
        ip_resolver: Callable[..., str] = get_public_ip,
    ) -> None:
        self.config = config
        self.http_client = http_client
        self.api = api
        self.logger = logger
        self.ip_resolver = ip_resolver
        self._stage = Stage.RESOLVE_IP

    def run(self) -> UpdateResult:
        """
        Run the update.

        Returns
        -------
        UpdateResult
            The outcome. Errors are logged once and returned, never raised.
        """
        try:
            return self._run()
        except DDNSError as e:
            if e.stage is None:
                e.stage = self._stage.value
            self.logger.critical("[%s] %s", e.stage, e.message)
            return UpdateResult(
                success=False,
                message=e.message,
                stage=self._stage,
                error=e,
            )

    def _run(self) -> UpdateResult:
        config = self.config

        self._stage = Stage.RESOLVE_IP
        value = self.resolve_value()
        self.logger.info("Successfully obtained IP. ip=%s", value)

        self._stage = Stage.LIST_RECORDS
        records = self.api.list_records(config.domain)
        self.logger.debug(
            "Fetched DNS records. domain=%s count=%d",
            config.domain,
            len(records),
        )

        self._stage = Stage.MATCH
        existing = self.match(records)

        if existing is not None:
            self._stage = Stage.UPDATE
            self.logger.info(
                "Update DNS Record. record_id=%s name=%s value=%s",
                existing.record_id,
                config.name,
                value,
            )
            response = self.api.update_record(
                config.domain,
                existing.record_id,
                config.name,
                value,
            )
            action = "updated"
            record_id = response.reply.record_id or existing.record_id
        else:
            self._stage = Stage.ADD
            self.logger.info(
                "Add DNS Record. type=%s name=%s value=%s",
                config.type,
                config.name,
                value,
            )
            response = self.api.add_record(
                config.domain,
                config.type,
                config.name,
                value,
            )
            action = "created"
            record_id = response.reply.record_id

        self._stage = Stage.REPORT
        self.report(action, response)

        return UpdateResult(
            success=True,
            message=f"DNS record {action} for {config.name}.{config.domain}",
            stage=self._stage,
            action=action,
            value=value,
            record_id=record_id,
            response=response,
        )

    def resolve_value(self) -> str:
        """
        Get the record value: the explicit one, or the discovered public IP.

        AAAA records are resolved through the IPv6 endpoint, every other
        type through the IPv4 one.
        """
        if self.config.record:
            return self.config.record
        return self.ip_resolver(
            self.http_client,
            ipv6=self.config.type == RecordType.AAAA,
        )

    def match(self, records: list[DNSRecord]) -> DNSRecord | None:
        """Find the existing record for the configured name and type."""
        return find_record(records, self.config.name, self.config.type, self.logger)

    def report(self, action: str, response: APIResponse) -> None:
        """Log the reply of the write operation."""
        reply = response.reply
        self.logger.info(
            "DNS record %s. code=%d detail=%s record_id=%s resource_record=%s",
            action,
            reply.code,
            reply.detail,
            reply.record_id,
            [record.model_dump() for record in reply.resource_record],
        )
