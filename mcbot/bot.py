import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from .address import parse_address
from .aggregator import AggregatorClient
from .config import (
    AGGREGATOR_TIMEOUT,
    AGGREGATOR_URL,
    COMMAND_COOLDOWN,
    COMMAND_PREFIX,
    LOG_FILE,
    get_env_or_raise,
)
from .errors import UsageError
from .formatting import (
    UNEXPECTED_ERROR_MESSAGE,
    format_checking,
    format_cooldown,
    format_result,
    format_usage,
)
from .resolver import StatusResolver

logger = logging.getLogger('minecraft_bot')


def setup_logging(log_file=LOG_FILE):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )


class MinecraftBot(commands.Bot):
    def __init__(self, resolver=None, aggregator=None):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(command_prefix=COMMAND_PREFIX, intents=intents)

        self.aggregator = aggregator or AggregatorClient(AGGREGATOR_URL, AGGREGATOR_TIMEOUT)
        self.resolver = resolver or StatusResolver(self.aggregator)

    async def setup_hook(self):
        await self.add_cog(StatusCommands(self))

    async def on_ready(self):
        logger.info(f'{self.user} has connected to Discord!')
        await self.tree.sync()

    async def on_command_error(self, ctx, error):
        if isinstance(error, commands.CommandOnCooldown):
            await ctx.reply(format_cooldown(error.retry_after))
            return
        if isinstance(error, commands.CommandNotFound):
            return
        await super().on_command_error(ctx, error)

    async def close(self):
        await self.aggregator.close()
        await super().close()

    async def check_server(self, send, args):
        """Run one status check and reply through `send`.

        An unreachable server is a normal reply; only faults in parsing,
        resolving or formatting produce the unexpected-error reply.
        """
        try:
            query = parse_address(args)
        except UsageError as e:
            await send(format_usage(reason=str(e) if args else None))
            return

        try:
            await send(format_checking(query))
            result = await self.resolver.resolve(query.host, query.port_hint)
            await send(format_result(result))
        except Exception as e:
            logger.exception(f"Error in check_server for {query.address}: {e}")
            await send(UNEXPECTED_ERROR_MESSAGE)


class StatusCommands(commands.Cog):
    def __init__(self, bot: MinecraftBot):
        self.bot = bot

    @commands.command(name="mc", help="Check Minecraft server status (auto Java/Bedrock)",
                      usage="<host[:port]>")
    @commands.cooldown(1, COMMAND_COOLDOWN, commands.BucketType.user)
    async def mc_command(self, ctx: commands.Context, *args: str):
        await self.bot.check_server(ctx.reply, args)

    @app_commands.command(name="mc", description="Check a Minecraft server status (auto Java/Bedrock)")
    @app_commands.describe(address="host or host:port", port="port (optional)")
    @app_commands.checks.cooldown(1, COMMAND_COOLDOWN, key=lambda i: i.user.id)
    async def mc_slash(self, interaction: discord.Interaction, address: str,
                       port: Optional[app_commands.Range[int, 1, 65535]] = None):
        await interaction.response.defer(thinking=True)
        args = [address] if port is None else [address, str(port)]
        await self.bot.check_server(interaction.followup.send, args)

    async def cog_app_command_error(self, interaction: discord.Interaction, error):
        if isinstance(error, app_commands.CommandOnCooldown):
            await interaction.response.send_message(
                format_cooldown(error.retry_after), ephemeral=True
            )
            return
        logger.error(f"Error in slash command: {error}")
        if interaction.response.is_done():
            await interaction.followup.send(UNEXPECTED_ERROR_MESSAGE)
        else:
            await interaction.response.send_message(UNEXPECTED_ERROR_MESSAGE, ephemeral=True)


def main():
    setup_logging()
    bot = MinecraftBot()
    bot.run(get_env_or_raise('DISCORD_TOKEN'), log_handler=None)


if __name__ == '__main__':
    main()
