"""Per-session upload state.

A session keeps the most recently *initiated* load's result. Each load takes a
request id from a counter; when a read finishes, its result is kept only if no
newer load has been started since, so a slow stale read cannot overwrite
fresher data.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from core.data import load_dashboard_data
from core.derive import derive_metrics
from core.errors import DashboardError, NoDataLoadedError
from core.market import MarketPrices
from core.models import DerivedMetrics, FamilyData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadOutcome:
    request_id: int
    accepted: bool
    data: Optional[FamilyData] = None
    error: Optional[str] = None
    error_type: Optional[str] = None


class UploadSession:
    def __init__(self, market: Optional[MarketPrices] = None):
        self._counter = itertools.count(1)
        self.latest_request_id = 0
        self.data: Optional[FamilyData] = None
        self.error: Optional[str] = None
        self.market = market or MarketPrices()
        # Uploader file id of the pick currently loaded.
        self.loaded_key: Optional[str] = None

    # ---- sequencing ----
    def begin_load(self) -> int:
        self.latest_request_id = next(self._counter)
        self.error = None
        return self.latest_request_id

    def is_current(self, request_id: int) -> bool:
        return request_id == self.latest_request_id

    def complete_load(self, request_id: int, data: FamilyData) -> LoadOutcome:
        if not self.is_current(request_id):
            logger.info("discarding stale load %d (latest is %d)", request_id, self.latest_request_id)
            return LoadOutcome(request_id, accepted=False)
        self.data = data
        self.error = None
        return LoadOutcome(request_id, accepted=True, data=data)

    def fail_load(self, request_id: int, error: Exception) -> LoadOutcome:
        message = str(error)
        error_type = type(error).__name__
        if not self.is_current(request_id):
            logger.info("discarding stale load error %d: %s", request_id, message)
            return LoadOutcome(request_id, accepted=False, error=message, error_type=error_type)
        # A failed upload keeps nothing from the file; the previous data is dropped too.
        self.data = None
        self.error = message
        return LoadOutcome(request_id, accepted=True, error=message, error_type=error_type)

    def load_bytes(self, request_id: int, content: bytes, filename: str = "") -> LoadOutcome:
        try:
            data = load_dashboard_data(content, filename)
        except DashboardError as exc:
            return self.fail_load(request_id, exc)
        return self.complete_load(request_id, data)

    def load_selection(self, key: str, content: bytes, filename: str = "") -> Optional[LoadOutcome]:
        """Load a file picked in the UI unless that same pick is already loaded.

        `key` must change with every new pick (Streamlit's `UploadedFile.file_id`),
        so re-selecting an edited file with the same name and size still reloads.
        """
        if key == self.loaded_key:
            return None
        outcome = self.load_bytes(self.begin_load(), content, filename)
        self.loaded_key = key
        return outcome

    async def load(self, read_bytes: Callable[[], Awaitable[bytes]], filename: str = "") -> LoadOutcome:
        """Await the file bytes, then parse and resolve synchronously."""
        request_id = self.begin_load()
        content = await read_bytes()
        return self.load_bytes(request_id, content, filename)

    # ---- state ----
    def clear(self) -> None:
        self.data = None
        self.error = None
        self.loaded_key = None

    def set_market(self, market: MarketPrices) -> None:
        self.market = market

    def require_data(self) -> FamilyData:
        if self.data is None:
            raise NoDataLoadedError()
        return self.data

    def metrics(self, market: Optional[MarketPrices] = None) -> DerivedMetrics:
        return derive_metrics(self.require_data().nick, market or self.market)
