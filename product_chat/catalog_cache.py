# product_chat/catalog_cache.py

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

import requests

from product_chat.logger import get_logger
import product_chat.exceptions as ex

log = get_logger(__name__)

CATALOG_TTL_SECONDS = 10 * 60
DEFAULT_TIMEOUT_SECONDS = 10.0

# Probed in this order; the first present field wins even if it is not a list.
PRODUCT_LIST_FIELDS: Tuple[str, ...] = ("content", "items", "products")


@dataclass(frozen=True)
class CatalogSnapshot:
  items: Tuple[Any, ...] = ()
  fetched_at: Optional[float] = None
  ttl: float = CATALOG_TTL_SECONDS

  def is_valid(self, now: float) -> bool:
    """A snapshot is valid only when it holds products and is younger than its ttl."""
    if not self.items or self.fetched_at is None:
      return False
    return now - self.fetched_at < self.ttl


def select_product_list(payload: Any) -> Any:
  """
  Pick the product list out of a decoded catalog payload.

  Object payloads are probed for each field of PRODUCT_LIST_FIELDS in order and
  the first field present is returned as-is. Object payloads without any of them,
  and every non-object payload, are returned whole.
  """
  if isinstance(payload, Mapping):
    for field in PRODUCT_LIST_FIELDS:
      if field in payload:
        log.debug(f"Product list located under '{field}'")
        return payload[field]
  return payload


class CatalogCache:
  """
  Process-wide product catalog with a fixed staleness deadline.

  The snapshot is replaced by a single reference assignment, so readers always
  see a complete snapshot. Refreshes are serialized by a lock and a caller that
  waited on it re-checks validity first, so concurrent misses share one fetch.
  """

  def __init__(self, url: str, session: Optional[requests.Session] = None,
               timeout: float = DEFAULT_TIMEOUT_SECONDS, clock: Callable[[], float] = time.monotonic):
    self.url = url
    self.session = session or requests.Session()
    self.timeout = timeout
    self.clock = clock
    self._snapshot = CatalogSnapshot()
    self._refresh_lock = threading.Lock()

  @property
  def snapshot(self) -> CatalogSnapshot:
    return self._snapshot

  def get(self) -> List[Any]:
    """
    Return the cached products, fetching fresh ones when the snapshot is empty or stale.

    Returns:
      List[Any]: Products in the order the catalog source sent them

    Raises:
      FetchError: The snapshot was invalid and the fetch failed. A stale
        snapshot is never served in its place.
    """
    snapshot = self._snapshot
    log.info(f"Current cache: {len(snapshot.items)} products (fetched_at={snapshot.fetched_at})")

    if snapshot.is_valid(self.clock()):
      log.info(f"Using cached products ({len(snapshot.items)})")
      return list(snapshot.items)

    with self._refresh_lock:
      # Another request may have refreshed while we waited
      snapshot = self._snapshot
      if snapshot.is_valid(self.clock()):
        log.info(f"Using products refreshed by a concurrent request ({len(snapshot.items)})")
        return list(snapshot.items)
      return self._fetch_and_replace()

  def refresh(self) -> List[Any]:
    """Fetch the catalog unconditionally and replace the snapshot."""
    with self._refresh_lock:
      return self._fetch_and_replace()

  def _fetch_and_replace(self) -> List[Any]:
    products = self._fetch()
    self._snapshot = CatalogSnapshot(items=tuple(products), fetched_at=self.clock(), ttl=CATALOG_TTL_SECONDS)
    log.info(f"Product cache replaced with {len(products)} products")
    return list(products)

  def _fetch(self) -> List[Any]:
    log.info(f"Fetching fresh products from: {self.url}")

    try:
      response = self.session.get(self.url, timeout=self.timeout)
    except requests.exceptions.Timeout as e:
      log.error(f"[CATALOG] Timeout after {self.timeout}s fetching {self.url}. Exception: {e}")
      raise ex.FetchError(f"Products API timed out after {self.timeout}s", reason="timeout")
    except requests.exceptions.RequestException as e:
      log.error(f"[CATALOG] Request to {self.url} failed. Exception: {e}")
      raise ex.FetchError(f"Products API request failed: {e}", reason="connection")

    log.info(f"Products API response status: {response.status_code}")

    if not 200 <= response.status_code < 300:
      log.error(f"[CATALOG] Products API returned HTTP {response.status_code}: {response.text}")
      raise ex.FetchError(f"Products API failed: {response.status_code}", status=response.status_code, body=response.text)

    try:
      payload = response.json()
    except ValueError as e:
      log.error(f"[CATALOG] Products API returned invalid JSON. Exception: {e}")
      raise ex.FetchError(f"Products API returned invalid JSON: {e}", status=response.status_code, reason="invalid-json")

    products = select_product_list(payload)

    if not isinstance(products, list):
      log.error(f"[CATALOG] Invalid products format: {type(products).__name__}")
      raise ex.FetchError("Products data is not an array", status=response.status_code, reason="not-an-array")

    log.info(f"Parsed {len(products)} products")
    return products
