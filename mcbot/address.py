from typing import Sequence

from .errors import UsageError
from .models import ServerQuery


def _parse_port(value: str) -> int:
    if not value.isdigit():
        raise UsageError(f"Port must be a number, got {value!r}")
    port = int(value)
    if not 0 < port < 65536:
        raise UsageError(f"Port must be between 1 and 65535, got {port}")
    return port


def parse_address(args: Sequence[str]) -> ServerQuery:
    """Build a ServerQuery from command tokens.

    Accepts ``host``, ``host:port`` or ``host port``. A second token is only
    used as the port when the first one has no colon and it is numeric.
    """
    if not args:
        raise UsageError("No server address given")

    first = args[0].strip()
    port_hint = None
    if ":" in first:
        host, _, port_text = first.rpartition(":")
        if port_text:
            port_hint = _parse_port(port_text)
    else:
        host = first
        if len(args) >= 2 and args[1].strip().isdigit():
            port_hint = _parse_port(args[1].strip())

    host = host.strip()
    if not host:
        raise UsageError("Server address is empty")
    return ServerQuery(host=host, port_hint=port_hint)
