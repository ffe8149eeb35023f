import asyncio
import logging

import aiohttp

from .config import AGGREGATOR_TIMEOUT, AGGREGATOR_URL, USER_AGENT
from .errors import AggregatorUnavailable

logger = logging.getLogger(__name__)


class AggregatorClient:
    """Client for the mcsrvstat.us style status API (``GET {base_url}/{host}``)."""

    def __init__(self, base_url=AGGREGATOR_URL, timeout=AGGREGATOR_TIMEOUT, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session
        self._owns_session = session is None

    def _get_session(self):
        if self.session is None:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self.session

    async def fetch(self, host):
        """Return the decoded status document for `host`.

        The lookup is keyed by host only; the aggregator resolves ports itself.
        """
        url = f"{self.base_url}/{host}"
        session = self._get_session()
        try:
            async with session.get(
                url,
                headers={'User-Agent': USER_AGENT},
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as response:
                if response.status != 200:
                    raise AggregatorUnavailable(f"{url} returned HTTP {response.status}")
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise AggregatorUnavailable(f"Request to {url} failed: {e!r}") from e

        if not isinstance(data, dict):
            raise AggregatorUnavailable(f"{url} returned a malformed body")
        logger.debug(f"Aggregator response for {host}: online={data.get('online')}")
        return data

    async def close(self):
        if self.session is not None and self._owns_session:
            await self.session.close()
            self.session = None
