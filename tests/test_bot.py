import pytest
from unittest.mock import AsyncMock, Mock, patch

from discord import app_commands
from discord.ext import commands

from mcbot.bot import MinecraftBot, StatusCommands
from mcbot.formatting import UNEXPECTED_ERROR_MESSAGE
from mcbot.models import QueryProtocol, ServerStatus, ServerUnreachable


@pytest.fixture
def resolver():
    """Resolver stand-in; each test sets what resolve() returns."""
    resolver = Mock()
    resolver.resolve = AsyncMock()
    return resolver


@pytest.fixture
def bot(resolver):
    aggregator = Mock()
    aggregator.close = AsyncMock()
    return MinecraftBot(resolver=resolver, aggregator=aggregator)


@pytest.mark.asyncio
async def test_check_server_replies_with_java_status(bot, resolver):
    resolver.resolve.return_value = ServerStatus(
        protocol_used=QueryProtocol.JAVA,
        host="play.hypixel.net",
        port=25565,
        players_online=4000,
        players_max=20000,
        version_label="1.8-1.20",
        software_or_edition="Unknown",
    )
    send = AsyncMock()

    await bot.check_server(send, ("play.hypixel.net",))

    resolver.resolve.assert_awaited_once_with("play.hypixel.net", None)
    assert send.await_count == 2
    assert "Checking server: play.hypixel.net" in send.await_args_list[0].args[0]
    assert "Players: 4000/20000" in send.await_args_list[1].args[0]


@pytest.mark.asyncio
async def test_check_server_passes_separate_port_token(bot, resolver):
    resolver.resolve.return_value = ServerUnreachable("bedrock.example.org", 19132)
    send = AsyncMock()

    await bot.check_server(send, ("bedrock.example.org", "19132"))

    resolver.resolve.assert_awaited_once_with("bedrock.example.org", 19132)


@pytest.mark.asyncio
async def test_unreachable_server_is_a_normal_reply(bot, resolver):
    resolver.resolve.return_value = ServerUnreachable("offline.example.com", None)
    send = AsyncMock()

    await bot.check_server(send, ("offline.example.com",))

    send.assert_awaited_with("❌ Server is offline or unreachable: offline.example.com")


@pytest.mark.asyncio
async def test_no_arguments_replies_with_usage(bot, resolver):
    send = AsyncMock()

    await bot.check_server(send, ())

    resolver.resolve.assert_not_awaited()
    send.assert_awaited_once()
    assert "Usage:" in send.await_args.args[0]


@pytest.mark.asyncio
async def test_bad_port_replies_with_usage(bot, resolver):
    send = AsyncMock()

    await bot.check_server(send, ("play.example.net:notaport",))

    resolver.resolve.assert_not_awaited()
    assert "Port must be a number" in send.await_args.args[0]


@pytest.mark.asyncio
async def test_internal_fault_is_reported_as_unexpected_error(bot, resolver):
    resolver.resolve.side_effect = RuntimeError("boom")
    send = AsyncMock()

    await bot.check_server(send, ("play.example.net",))

    send.assert_awaited_with(UNEXPECTED_ERROR_MESSAGE)



@pytest.mark.asyncio
async def test_prefix_cooldown_replies_with_retry_time(bot):
    ctx = Mock()
    ctx.reply = AsyncMock()
    error = commands.CommandOnCooldown(commands.Cooldown(1, 5.0), 3.2, commands.BucketType.user)

    await bot.on_command_error(ctx, error)

    ctx.reply.assert_awaited_once_with("⏳ Slow down! Try again in 3s.")


def slash_interaction(done=False):
    interaction = Mock()
    interaction.response.defer = AsyncMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.is_done = Mock(return_value=done)
    interaction.followup.send = AsyncMock()
    return interaction


@pytest.mark.asyncio
async def test_slash_command_joins_address_and_port(bot):
    bot.check_server = AsyncMock()
    cog = StatusCommands(bot)
    interaction = slash_interaction()

    await StatusCommands.mc_slash.callback(cog, interaction, "bedrock.example.org", 19132)

    interaction.response.defer.assert_awaited_once_with(thinking=True)
    bot.check_server.assert_awaited_once_with(
        interaction.followup.send, ["bedrock.example.org", "19132"]
    )


@pytest.mark.asyncio
async def test_slash_command_without_port(bot):
    bot.check_server = AsyncMock()
    cog = StatusCommands(bot)
    interaction = slash_interaction()

    await StatusCommands.mc_slash.callback(cog, interaction, "play.hypixel.net")

    bot.check_server.assert_awaited_once_with(interaction.followup.send, ["play.hypixel.net"])


@pytest.mark.asyncio
async def test_slash_cooldown_replies_ephemerally(bot):
    cog = StatusCommands(bot)
    interaction = slash_interaction()
    error = app_commands.CommandOnCooldown(app_commands.Cooldown(1, 5.0), 4.0)

    await cog.cog_app_command_error(interaction, error)

    interaction.response.send_message.assert_awaited_once_with(
        "⏳ Slow down! Try again in 4s.", ephemeral=True
    )


@pytest.mark.asyncio
async def test_slash_error_after_defer_uses_followup(bot):
    cog = StatusCommands(bot)
    interaction = slash_interaction(done=True)

    await cog.cog_app_command_error(interaction, app_commands.AppCommandError("boom"))

    interaction.followup.send.assert_awaited_once_with(UNEXPECTED_ERROR_MESSAGE)
    interaction.response.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_slash_error_before_defer_uses_response(bot):
    cog = StatusCommands(bot)
    interaction = slash_interaction(done=False)

    await cog.cog_app_command_error(interaction, app_commands.AppCommandError("boom"))

    interaction.response.send_message.assert_awaited_once_with(
        UNEXPECTED_ERROR_MESSAGE, ephemeral=True
    )


@pytest.mark.asyncio
async def test_close_closes_aggregator(bot):
    with patch('discord.ext.commands.Bot.close', new_callable=AsyncMock) as mock_close:
        await bot.close()

    bot.aggregator.close.assert_awaited_once()
    mock_close.assert_awaited_once()
