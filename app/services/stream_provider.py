"""
Cloudflare Stream live inputs client.
Live inputs are the provider-side ingest endpoints; our Stream rows wrap them.
API: https://developers.cloudflare.com/api/resources/stream/subresources/live_inputs/
"""
from typing import Any
import httpx
from app.config import get_settings

CF_STREAM_BASE = "https://api.cloudflare.com/client/v4/accounts"
REQUEST_TIMEOUT_SECONDS = 10.0


class StreamProviderError(Exception):
    """Provider request failed or returned something we cannot use."""


class CloudflareStreamClient:
    def __init__(
        self,
        account_id: str,
        api_token: str,
        base_url: str = CF_STREAM_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.account_id = account_id
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def _live_inputs_url(self, *parts: str) -> str:
        return "/".join([f"{self.base_url}/{self.account_id}/stream/live_inputs", *parts])

    async def _request(self, method: str, url: str, json: dict | None = None) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.api_token}"}
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=REQUEST_TIMEOUT_SECONDS) as client:
                res = await client.request(method, url, json=json, headers=headers)
            res.raise_for_status()
            data = res.json()
        except (httpx.HTTPError, ValueError) as e:
            raise StreamProviderError(f"{method} live_inputs failed: {e.__class__.__name__}") from e
        if not isinstance(data, dict):
            raise StreamProviderError(f"{method} live_inputs returned an unexpected body")
        return data

    async def create_live_input(self, title: str, recording_mode: str = "automatic") -> dict[str, Any]:
        """Returns the live input result: {uid, rtmps: {url, streamKey}, ...}."""
        data = await self._request(
            "POST",
            self._live_inputs_url(),
            json={"meta": {"name": title}, "recording": {"mode": recording_mode}},
        )
        result = data.get("result")
        return result if isinstance(result, dict) else {}

    async def get_live_input(self, live_input_id: str) -> dict[str, Any]:
        data = await self._request("GET", self._live_inputs_url(live_input_id))
        result = data.get("result")
        return result if isinstance(result, dict) else {}

    async def list_recordings(self, live_input_id: str) -> list[dict[str, Any]]:
        """Videos recorded from the live input, newest first as returned by the provider."""
        data = await self._request("GET", self._live_inputs_url(live_input_id, "videos"))
        result = data.get("result")
        return [v for v in result if isinstance(v, dict)] if isinstance(result, list) else []


def embed_url(account_id: str, live_input_id: str) -> str:
    return f"https://customer-{account_id}.cloudflarestream.com/{live_input_id}/iframe"


def get_stream_provider() -> CloudflareStreamClient | None:
    """None when CLOUDFLARE_STREAM_API_TOKEN is not configured."""
    settings = get_settings()
    if not settings.cloudflare_stream_api_token:
        return None
    return CloudflareStreamClient(settings.cloudflare_account_id, settings.cloudflare_stream_api_token)
