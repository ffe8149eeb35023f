import asyncio
import socket

from mcstatus import BedrockServer, JavaServer

from .config import LOOKUP_TIMEOUT, QUERY_TIMEOUT
from .errors import LookupFailure


async def _java_ping(host, port, timeout):
    if port is None:
        # follows _minecraft._tcp SRV records, falling back to host:25565
        server = await JavaServer.async_lookup(host, timeout=timeout)
    else:
        server = JavaServer(host, port, timeout=timeout)
    status = await server.async_status(tries=1)
    return status, server.address


async def query_java(host, port=None, timeout=QUERY_TIMEOUT):
    """Server list ping over the Java protocol. Raises on timeout or bad data.

    Returns the status and the address actually pinged, which differs from
    `host` when an SRV record redirected the query.
    """
    # mcstatus applies the timeout per socket operation, this bounds the whole ping
    return await asyncio.wait_for(_java_ping(host, port, timeout), timeout)


async def query_bedrock(host, port, timeout=QUERY_TIMEOUT):
    server = BedrockServer(host, port, timeout=timeout)
    return await asyncio.wait_for(server.async_status(tries=1), timeout)


async def resolve_ip(hostname, timeout=LOOKUP_TIMEOUT):
    """Resolve a hostname to one IP address, preferring IPv4."""
    loop = asyncio.get_running_loop()
    try:
        infos = await asyncio.wait_for(
            loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM),
            timeout
        )
    except (OSError, asyncio.TimeoutError) as e:
        raise LookupFailure(f"Could not resolve {hostname}: {e!r}") from e

    if not infos:
        raise LookupFailure(f"No addresses for {hostname}")
    for family, _, _, _, sockaddr in infos:
        if family == socket.AF_INET:
            return sockaddr[0]
    return infos[0][4][0]
