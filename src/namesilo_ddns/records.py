"""Matching of listed DNS records against the requested host and type."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from namesilo_ddns.models import DNSRecord, RecordType


logger = logging.getLogger(__name__)


def get_domain_prefix(host: str) -> str:
    """
    Get the subdomain part of a fully qualified host name.

    The last two labels are taken as the registrable domain, so
    "sub.example.com" gives "sub" and "example.com" gives "".

    Parameters
    ----------
    host : str
        Fully qualified host name.

    Returns
    -------
    str
        Every label except the last two, joined with dots.
    """
    parts = host.split(".")
    return ".".join(parts[:-2])


def find_record(
    records: Iterable[DNSRecord],
    name: str,
    record_type: RecordType | str,
    log: logging.Logger | None = None,
) -> DNSRecord | None:
    """
    Find the record for a subdomain and record type.

    The whole list is scanned and, when several records match, the last
    one in list order is returned.

    Parameters
    ----------
    records : Iterable[DNSRecord]
        Records as listed by the provider.
    name : str
        Subdomain label (e.g., "home").
    record_type : RecordType | str
        The record type to match.
    log : logging.Logger | None, optional
        Logger for the per-record debug lines.

    Returns
    -------
    DNSRecord | None
        The matching record, or None if no record matches.
    """
    log = log or logger
    match: DNSRecord | None = None

    for record in records:
        if get_domain_prefix(record.host) == name and record.type == record_type:
            match = record
        log.debug(
            "Record value. record_id=%s type=%s host=%s value=%s ttl=%s",
            record.record_id,
            record.type,
            record.host,
            record.value,
            record.ttl,
        )

    return match
