"""Result types produced by the status resolver."""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .config import BEDROCK_DEFAULT_PORT, JAVA_DEFAULT_PORT


class QueryProtocol(str, enum.Enum):
    """Data source that produced a status."""

    JAVA = "Java"
    BEDROCK = "Bedrock"
    AGGREGATOR = "mcsrvstat"


@dataclass(frozen=True)
class ServerQuery:
    host: str
    port_hint: Optional[int] = None

    @property
    def java_port(self) -> int:
        return self.port_hint or JAVA_DEFAULT_PORT

    @property
    def bedrock_port(self) -> int:
        return self.port_hint or BEDROCK_DEFAULT_PORT

    @property
    def address(self) -> str:
        """Host as typed by the user, with the port only if one was given."""
        if self.port_hint:
            return f"{self.host}:{self.port_hint}"
        return self.host


@dataclass(frozen=True)
class ServerStatus:
    protocol_used: QueryProtocol
    host: str
    port: Optional[int]
    players_online: int
    players_max: Union[int, str]
    version_label: str
    software_or_edition: str
    motd: Optional[str] = None
    hosting_guess: str = "Unknown"
    player_sample: Tuple[str, ...] = ()
    online: bool = True


@dataclass(frozen=True)
class ServerUnreachable:
    host: str
    port_hint: Optional[int] = None


StatusResult = Union[ServerStatus, ServerUnreachable]
