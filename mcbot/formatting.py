"""Chat reply templates."""

from .config import COMMAND_PREFIX
from .models import QueryProtocol, ServerQuery, ServerStatus, StatusResult

RULE = "━━━━━━━━━━━━━━━━━━━━━━━━"

UNEXPECTED_ERROR_MESSAGE = "⚠️ An unexpected error occurred while checking the server."


def format_usage(prefix=COMMAND_PREFIX, reason=None):
    lines = []
    if reason:
        lines.append(f"⚠️ {reason}.")
    lines.append(f"⚠️ Usage: {prefix}mc <host[:port]>")
    lines.append(f"Example: {prefix}mc play.hypixel.net")
    lines.append(f"Or: {prefix}mc play.nethergames.org:19132")
    return "\n".join(lines)


def format_checking(query: ServerQuery):
    return f"⏳ Checking server: {query.address}  - please wait..."


def format_cooldown(retry_after):
    return f"⏳ Slow down! Try again in {retry_after:.0f}s."


def format_player_sample(names):
    if not names:
        return "No visible player names."
    return "\n".join(f"{i}. {name}" for i, name in enumerate(names, start=1))


def format_java(status: ServerStatus):
    return (
        f"🎮 Minecraft Server Info (Java)\n"
        f"{RULE}\n"
        f"🌐 Host: {status.host}:{status.port}\n"
        f"✅ Status: ONLINE\n"
        f"🖥️ Software: {status.software_or_edition}\n"
        f"🎮 Version: {status.version_label}\n"
        f"👥 Players: {status.players_online}/{status.players_max}\n"
        f"📡 Hosting: {status.hosting_guess}\n"
        f"\n"
        f"👑 Top players (up to 10):\n"
        f"{format_player_sample(status.player_sample)}\n"
        f"{RULE}\n"
        f"✨ Tip: If player names are not visible, the server may hide its sample list."
    )


def format_bedrock(status: ServerStatus):
    return (
        f"🎮 Minecraft Server Info (Bedrock)\n"
        f"{RULE}\n"
        f"🌐 Host: {status.host}:{status.port}\n"
        f"✅ Status: ONLINE\n"
        f"🖥️ Edition: {status.software_or_edition}\n"
        f"🎮 Version: {status.version_label}\n"
        f"👥 Players: {status.players_online}/{status.players_max}\n"
        f"📡 Hosting: {status.hosting_guess}\n"
        f"\n"
        f"⚠️ Note: Bedrock does not expose the player name list via query."
    )


def format_aggregator(status: ServerStatus):
    return (
        f"🎮 Minecraft Server Info (Via mcsrvstat)\n"
        f"{RULE}\n"
        f"🌐 Host: {status.host}\n"
        f"✅ Status: ONLINE (info from mcsrvstat)\n"
        f"🖥️ Software: {status.software_or_edition}\n"
        f"🎮 Version: {status.version_label}\n"
        f"👥 Players: {status.players_online}/{status.players_max}\n"
        f"📡 Hosting: {status.hosting_guess}\n"
        f"💬 MOTD: {status.motd or 'N/A'}\n"
        f"{RULE}"
    )


def format_unreachable(query: ServerQuery):
    return f"❌ Server is offline or unreachable: {query.address}"


_TEMPLATES = {
    QueryProtocol.JAVA: format_java,
    QueryProtocol.BEDROCK: format_bedrock,
    QueryProtocol.AGGREGATOR: format_aggregator,
}


def format_result(result: StatusResult) -> str:
    """Render a resolver result into the reply text for its source."""
    if isinstance(result, ServerStatus):
        return _TEMPLATES[result.protocol_used](result)
    return format_unreachable(ServerQuery(result.host, result.port_hint))
