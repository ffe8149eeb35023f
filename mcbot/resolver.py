"""Ordered fallback from the Java protocol to Bedrock to the status aggregator."""

import logging
from dataclasses import replace
from functools import partial
from typing import Optional, Tuple

from .config import (
    HOSTING_BRANDS,
    IP_PREFIX_PROVIDERS,
    LOOKUP_TIMEOUT,
    PLAYER_SAMPLE_LIMIT,
    QUERY_TIMEOUT,
)
from .hosting import guess_hosting
from .minecraft_utils import query_bedrock, query_java, resolve_ip
from .models import QueryProtocol, ServerQuery, ServerStatus, ServerUnreachable, StatusResult

logger = logging.getLogger(__name__)


def _or_default(value, default):
    return default if value is None else value


def version_label(version) -> str:
    """Human readable version name, else the raw version value, else "Unknown"."""
    if version is None:
        return "Unknown"
    if isinstance(version, str):
        return version or "Unknown"
    name = getattr(version, 'name', None)
    if name:
        return str(name)
    protocol = getattr(version, 'protocol', None)
    if protocol is not None:
        return str(protocol)
    return "Unknown"


def java_status(query: ServerQuery, response, port: Optional[int] = None) -> ServerStatus:
    players = getattr(response, 'players', None)
    sample = getattr(players, 'sample', None) or []
    raw = getattr(response, 'raw', None)
    software = raw.get('software') if isinstance(raw, dict) else None
    return ServerStatus(
        protocol_used=QueryProtocol.JAVA,
        host=query.host,
        port=port or query.java_port,
        players_online=_or_default(getattr(players, 'online', None), 0),
        players_max=_or_default(getattr(players, 'max', None), "N/A"),
        version_label=version_label(getattr(response, 'version', None)),
        software_or_edition=software or "Unknown",
        player_sample=tuple(p.name for p in sample[:PLAYER_SAMPLE_LIMIT]),
    )


def bedrock_status(query: ServerQuery, response) -> ServerStatus:
    # Older mcstatus releases expose flat players_online/players_max fields
    players = getattr(response, 'players', None)
    online = getattr(players, 'online', None)
    if online is None:
        online = getattr(response, 'players_online', None)
    maximum = getattr(players, 'max', None)
    if maximum is None:
        maximum = getattr(response, 'players_max', None)

    version = getattr(response, 'version', None)
    return ServerStatus(
        protocol_used=QueryProtocol.BEDROCK,
        host=query.host,
        port=query.bedrock_port,
        players_online=_or_default(online, 0),
        players_max=_or_default(maximum, "N/A"),
        version_label=version_label(version),
        software_or_edition=getattr(version, 'brand', None) or "Bedrock",
    )


def clean_motd(motd) -> str:
    """Join the aggregator's cleaned MOTD lines into one line."""
    lines = motd.get('clean') if isinstance(motd, dict) else None
    if isinstance(lines, str):
        lines = [lines]
    if not lines:
        return "N/A"
    return " ".join(line.strip() for line in lines if line and line.strip()) or "N/A"


def aggregator_status(query: ServerQuery, data: dict) -> ServerStatus:
    players = data.get('players') or {}
    return ServerStatus(
        protocol_used=QueryProtocol.AGGREGATOR,
        host=query.host,
        port=data.get('port'),
        players_online=_or_default(players.get('online'), 0),
        players_max=_or_default(players.get('max'), "N/A"),
        version_label=str(data.get('version') or "Unknown"),
        software_or_edition=str(data.get('software') or "Unknown"),
        motd=clean_motd(data.get('motd')),
    )


class StatusResolver:
    """Resolve a server's status from the first source that answers.

    Sources are tried once each, in order: Java list ping, Bedrock ping,
    then the aggregator API. All collaborators are injectable so the
    resolver holds no state between calls.
    """

    def __init__(self, aggregator, java_query=None, bedrock_query=None, lookup=None,
                 timeout=QUERY_TIMEOUT, lookup_timeout=LOOKUP_TIMEOUT,
                 brands=HOSTING_BRANDS, ip_prefixes=IP_PREFIX_PROVIDERS):
        self.aggregator = aggregator
        self.java_query = java_query or query_java
        self.bedrock_query = bedrock_query or query_bedrock
        self.lookup = lookup or partial(resolve_ip, timeout=lookup_timeout)
        self.timeout = timeout
        self.brands = brands
        self.ip_prefixes = ip_prefixes

    async def resolve(self, host: str, port_hint: Optional[int] = None) -> StatusResult:
        query = ServerQuery(host, port_hint)
        attempts = (
            ("Java", self._try_java),
            ("Bedrock", self._try_bedrock),
            ("Aggregator", self._try_aggregator),
        )
        for name, attempt in attempts:
            try:
                outcome = await attempt(query)
            except Exception as e:
                logger.warning(f"{name} query for {query.address} failed: {e!r}")
                continue
            if outcome is None:
                logger.info(f"{name} source reports {query.address} offline")
                continue

            status, record_host = outcome
            hosting = await guess_hosting(
                query.host, self.lookup, record_host, self.brands, self.ip_prefixes
            )
            logger.info(
                f"Resolved {query.address} via {status.protocol_used.value}: "
                f"{status.players_online}/{status.players_max} players"
            )
            return replace(status, hosting_guess=hosting)

        logger.info(f"{query.address} is unreachable on every source")
        return ServerUnreachable(host=query.host, port_hint=query.port_hint)

    async def _try_java(self, query: ServerQuery) -> Tuple[ServerStatus, Optional[str]]:
        # No port hint lets the query follow SRV records
        response, address = await self.java_query(query.host, query.port_hint, self.timeout)
        record_host = address.host
        if record_host.rstrip('.').lower() == query.host.rstrip('.').lower():
            record_host = None
        return java_status(query, response, address.port), record_host

    async def _try_bedrock(self, query: ServerQuery) -> Tuple[ServerStatus, None]:
        response = await self.bedrock_query(query.host, query.bedrock_port, self.timeout)
        return bedrock_status(query, response), None

    async def _try_aggregator(self, query: ServerQuery) -> Optional[Tuple[ServerStatus, Optional[str]]]:
        data = await self.aggregator.fetch(query.host)
        if data.get('online') is not True:
            return None
        return aggregator_status(query, data), data.get('hostname') or data.get('ip')
