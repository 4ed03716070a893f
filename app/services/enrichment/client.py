from typing import Any

from app.core.base_client import BaseClient


class OEmbedClient(BaseClient):
    """
    Client for the Spotify oEmbed endpoint. Returns title and thumbnail for a
    public track URL without any credentials.
    """

    def __init__(self, base_url: str = "https://open.spotify.com", timeout: float = 5.0, max_retries: int = 2):
        super().__init__(
            base_url=base_url, timeout=timeout, max_retries=max_retries, headers={"Accept": "application/json"}
        )

    async def fetch(self, track_url: str) -> dict[str, Any]:
        return await self.get("/oembed", params={"url": track_url})
