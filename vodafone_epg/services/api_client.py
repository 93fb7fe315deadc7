"""
Provider API client

Requests one schedule page per (channel, day, time bucket) and classifies the
response into a FetchOutcome. Requests are sequential and preceded by a fixed
pause; there is no retry.
"""
import json
import logging
import time
from datetime import date
from typing import Callable

import httpx

from vodafone_epg.schemas import ApiErrorPayload
from vodafone_epg.services.fetch_types import FetchOutcome


logger = logging.getLogger(__name__)

BUCKETS = ("00-06", "06-12", "12-18", "18-00")


class VodafoneApiClient:
    """Synchronous client for the provider schedule endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        delay: float = 0.1,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.delay = delay
        self._sleep = sleep
        headers = {"Accept-Encoding": "gzip, deflate"}
        if user_agent:
            headers["User-Agent"] = user_agent
        self._client = httpx.Client(
            timeout=timeout,
            headers=headers,
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self) -> "VodafoneApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def build_url(self, channel_key: str, day: date, bucket: str) -> str:
        """Schedule URL for one channel, day and bucket"""
        if bucket not in BUCKETS:
            raise ValueError(f"Unknown time bucket: {bucket}")
        return f"{self.base_url}/{channel_key}/{day.year:04d}/{day.month:02d}/{day.day:02d}/{bucket}"

    def fetch_bucket(self, channel_key: str, day: date, bucket: str) -> FetchOutcome:
        """
        Fetch the programmes of one channel for one time bucket.

        Args:
            channel_key: Provider channel key
            day: Calendar day
            bucket: One of BUCKETS

        Returns:
            FetchOutcome with status:
            - 'ok': the envelope carried programme objects
            - 'empty': HTTP/network failure, or no result.objects in the envelope
            - 'failed': the body could not be decoded as a JSON object
        """
        url = self.build_url(channel_key, day, bucket)

        self._sleep(self.delay)
        logger.debug(f"GET {url}")
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Request to {url} failed: {type(e).__name__}: {e}")
            return FetchOutcome.empty(f"request error: {type(e).__name__}")

        if not response.is_success:
            self._log_error_response(url, response)
            return FetchOutcome.empty(f"HTTP {response.status_code}")

        try:
            envelope = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Undecodable response from {url}: {e}")
            return FetchOutcome.failed(f"undecodable response from {url}")

        if not isinstance(envelope, dict):
            logger.error(f"Unexpected response from {url}: {type(envelope).__name__}")
            return FetchOutcome.failed(f"response from {url} is not a JSON object")

        result = envelope.get("result")
        objects = result.get("objects") if isinstance(result, dict) else None
        if not isinstance(objects, list):
            return FetchOutcome.empty("response has no result.objects")
        if not objects:
            return FetchOutcome.empty("response has no programmes")

        return FetchOutcome.ok([obj for obj in objects if isinstance(obj, dict)])

    def _log_error_response(self, url: str, response: httpx.Response) -> None:
        """Log an HTTP error, including the provider error payload when sent"""
        content_type = response.headers.get("content-type", "").lower()
        if "text/html" in content_type and "utf-8" in content_type:
            try:
                payload = ApiErrorPayload.model_validate(json.loads(response.text))
            except ValueError:
                logger.warning(f"HTTP {response.status_code} from {url} (unparsable error body)")
                return
            logger.warning(
                f"Server {payload.server_id} at {payload.datetime}: "
                f"{payload.message} (code {payload.code})"
            )
            return

        logger.warning(f"HTTP {response.status_code} from {url}")
