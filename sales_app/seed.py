"""
Seed loader: pulls the product transaction list from the remote JSON source.
"""

import logging

import aiohttp
from starlette.concurrency import run_in_threadpool

from .config import get_settings
from .preprocessing import preprocessing_data

logger = logging.getLogger(__name__)


async def fetch_seed_payload(url: str, timeout: float, session: aiohttp.ClientSession = None):
    """
    Download the raw seed payload.

    Raises aiohttp.ClientError on transport failures and non-2xx responses,
    asyncio.TimeoutError when the request exceeds ``timeout`` seconds.
    """
    async def _get(sess):
        async with sess.get(url) as resp:
            resp.raise_for_status()
            return await resp.json(content_type=None)

    if session is not None:
        return await _get(session)
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
        return await _get(session)


async def load_seed_rows(session: aiohttp.ClientSession = None):
    """Fetch the configured seed source and return rows ready for insertion."""
    settings = get_settings()
    logger.info("Fetching seed data from %s", settings.seed_url)
    payload = await fetch_seed_payload(settings.seed_url, settings.seed_timeout, session=session)
    rows = await run_in_threadpool(preprocessing_data, payload)
    logger.info("Prepared %d seed rows", len(rows))
    return rows
