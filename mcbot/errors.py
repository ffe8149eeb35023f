class McBotError(Exception):
    """Base class for errors raised by mcbot."""


class UsageError(McBotError):
    """The command arguments could not be turned into a server address."""


class AggregatorUnavailable(McBotError):
    """The status aggregator could not be reached or returned garbage."""


class LookupFailure(McBotError):
    """A hostname could not be resolved to an IP address."""
