"""HTTP client holding the in-memory snapshot of every content segment.

The store is an explicit object: build one per consumer and pass it around.
Reads never hit the network; ``load()`` refreshes every segment and
``replace()`` writes one whole segment back.
"""
import copy
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from storefront.defaults import default_segments
from storefront.errors import NotFoundError, TransportError
from storefront.models.segment import OBJECT_SEGMENTS, SEGMENT_KEYS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplaceResult:
    """Outcome of a segment write.

    ``applied`` is always true: the local snapshot is updated even when the
    remote write fails. ``persisted`` tells whether the server acknowledged it.
    """

    applied: bool
    persisted: bool
    error: Optional[str] = None

    def __bool__(self):
        return self.persisted


class ContentStore:
    def __init__(self, base_url, token=None, defaults=None, client=None,
                 keys=SEGMENT_KEYS, timeout=10.0):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.keys = tuple(keys)
        self._client = client or httpx.Client(timeout=timeout)
        self._data = default_segments() if defaults is None else copy.deepcopy(defaults)
        self.is_loading = False

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key, default=None):
        if key in self._data and self._data[key] is not None:
            return self._data[key]
        if default is not None:
            return default
        return {} if key in OBJECT_SEGMENTS else []

    def __getitem__(self, key):
        return self.get(key)

    def __contains__(self, key):
        return key in self._data

    def snapshot(self):
        """Deep copy of every segment currently held."""
        return copy.deepcopy(self._data)

    @property
    def products(self):
        return self.get("products")

    @property
    def collections(self):
        return self.get("collections")

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self):
        """Refresh every known segment from the content API.

        Segments are independent: a failed or missing segment keeps whatever
        value was already held. Never raises. Returns the refreshed keys.
        """
        self.is_loading = True
        refreshed = []
        try:
            for key in self.keys:
                try:
                    value = self._fetch(key)
                except NotFoundError:
                    logger.info("Segment %s not available, keeping defaults", key)
                    continue
                except TransportError as e:
                    logger.warning("Failed to fetch segment %s (%s), keeping defaults", key, e)
                    continue
                self._data[key] = value
                refreshed.append(key)
        finally:
            self.is_loading = False
        return refreshed

    def _fetch(self, key):
        try:
            resp = self._client.get(self._url(key))
        except httpx.HTTPError as e:
            raise TransportError(str(e)) from e

        if resp.status_code == 404:
            raise NotFoundError(key)
        if not resp.is_success:
            raise TransportError(f"HTTP {resp.status_code} for {key}")
        # An HTML fallback page means the API is not deployed here
        if not _is_json(resp):
            raise NotFoundError(key)
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(f"Malformed JSON for {key}") from e

    # ------------------------------------------------------------------
    # Replace
    # ------------------------------------------------------------------

    def replace(self, key, value):
        """Write the whole value of ``key``; apply locally regardless of outcome."""
        self._data[key] = value
        try:
            self._push(key, value)
        except TransportError as e:
            logger.error("Failed to persist segment %s: %s", key, e)
            return ReplaceResult(applied=True, persisted=False, error=str(e))
        return ReplaceResult(applied=True, persisted=True)

    def _push(self, key, value):
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            resp = self._client.post(self._url(key), json=value, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(str(e)) from e

        if not resp.is_success:
            raise TransportError(f"API error: HTTP {resp.status_code}")
        if not _is_json(resp):
            raise TransportError(
                f"API endpoint returned non-JSON. Status: {resp.status_code}"
            )
        try:
            body = resp.json()
        except ValueError as e:
            raise TransportError("Malformed acknowledgement") from e
        if isinstance(body, dict) and body.get("success") is False:
            raise TransportError(body.get("message") or "Write rejected")

    def _url(self, key):
        return f"{self.base_url}/api/data/{key}"

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def _is_json(resp):
    return "application/json" in resp.headers.get("content-type", "")
