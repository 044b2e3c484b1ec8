"""
Attachment lookup and download for the post a mention refers to.
"""

import asyncio
from typing import Any, List

import requests

from mention_gateway.errors import MediaFetchError
from mention_gateway.models import MentionPost
from mention_gateway.observability.logger import get_logger


def extract_media_locations(post: MentionPost) -> List[str]:
    """Return candidate attachment URLs for the post (possibly empty)."""
    return list(post.media_urls)


class MediaFetcher:
    """Downloads raw attachment bytes over HTTP(S)."""

    def __init__(self, http: Any = requests):
        self.http = http
        self.logger = get_logger("mention_gateway.router.media")

    def _download(self, url: str) -> bytes:
        response = self.http.get(url)
        response.raise_for_status()
        return response.content

    async def fetch(self, url: str) -> bytes:
        """
        Download one attachment.

        Raises:
            MediaFetchError: on any transport failure or non-2xx status
        """
        self.logger.info(f"Downloading media: {url}")
        try:
            data = await asyncio.to_thread(self._download, url)
        except requests.RequestException as e:
            self.logger.error(f"Media download failed for {url}: {e}")
            raise MediaFetchError(f"Failed to download media from {url}: {e}", url=url) from e

        self.logger.info(f"Downloaded {len(data)} bytes of media")
        return data
