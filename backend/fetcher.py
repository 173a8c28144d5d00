"""Fetch the full property collection from the read endpoint."""

import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from .config import FETCH_TIMEOUT, property_url
from .schemas import Property

logger = logging.getLogger(__name__)

FETCH_ERROR = "Error fetching properties"
LOAD_ERROR = "Failed to load properties"


@dataclass(frozen=True)
class FetchResult:
    properties: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_envelope(payload) -> FetchResult:
    """Validate a ``{success, properties}`` envelope.

    A bad envelope fails the whole load; a bad record is skipped.
    """
    if not isinstance(payload, dict) or payload.get("success") is not True:
        return FetchResult(error=LOAD_ERROR)
    if not isinstance(payload.get("properties"), list):
        return FetchResult(error=LOAD_ERROR)

    properties = []
    for i, record in enumerate(payload["properties"]):
        try:
            prop = Property.model_validate(record)
        except ValidationError as e:
            rid = record.get("_id") if isinstance(record, dict) else None
            logger.warning("skipping property record %s (%s): %s", i, rid, e)
            continue
        properties.append(prop.model_dump(by_alias=True, exclude_unset=True))
    return FetchResult(properties=properties)


class ListingFetcher:
    """One GET for the whole collection; no retry, no source pagination.

    ``session`` carries the credentials (cookies) sent with the request.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = FETCH_TIMEOUT,
    ):
        self.url = url or property_url()
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self) -> FetchResult:
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException:
            logger.exception("property fetch failed: %s", self.url)
            return FetchResult(error=FETCH_ERROR)

        try:
            payload = resp.json()
        except ValueError:
            logger.error("property response is not JSON (status %s)", resp.status_code)
            return FetchResult(error=LOAD_ERROR)

        result = parse_envelope(payload)
        if result.ok:
            logger.info("fetched %d properties", len(result.properties))
        else:
            logger.error("unexpected property envelope (status %s)", resp.status_code)
        return result

    def start(self, executor: Optional[ThreadPoolExecutor] = None) -> "FetchTask":
        """Run :meth:`fetch` on a worker thread; see :class:`FetchTask`."""
        return FetchTask(self, executor)


class FetchTask:
    """A started fetch whose result is discarded once cancelled.

    The request itself is not interrupted; cancelling only guarantees the
    owning view never receives the result.
    """

    def __init__(self, fetcher: ListingFetcher, executor: Optional[ThreadPoolExecutor] = None):
        self._cancelled = threading.Event()
        self._own_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1)
        self._future: Future = self._executor.submit(fetcher.fetch)
        if self._own_executor:
            self._executor.shutdown(wait=False)

    def cancel(self) -> None:
        self._cancelled.set()
        self._future.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> Optional[FetchResult]:
        """The fetch result, or None if the task was cancelled."""
        if self.cancelled:
            return None
        try:
            result = self._future.result(timeout=timeout)
        except CancelledError:
            return None
        if self.cancelled:
            logger.debug("discarding property fetch result after cancel")
            return None
        return result
