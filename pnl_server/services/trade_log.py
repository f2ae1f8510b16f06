"""Append-only record of accepted trades."""

import threading
import uuid
from typing import Iterator, List, Optional

from pnl_server.models import Trade, TradeSubmission


class TradeLog:
    """Keeps every accepted trade in submission order."""

    def __init__(self):
        self._trades: List[Trade] = []
        self._lock = threading.Lock()

    def append(self, submission: TradeSubmission) -> Trade:
        """Assign a fresh id to the submission and store it at the end."""
        trade = Trade.from_submission(str(uuid.uuid4()), submission)
        with self._lock:
            self._trades.append(trade)
        return trade

    def trades(self, limit: Optional[int] = None) -> List[Trade]:
        """Get the recorded trades, oldest first."""
        with self._lock:
            if limit:
                return self._trades[-limit:]
            return list(self._trades)

    def __len__(self) -> int:
        with self._lock:
            return len(self._trades)

    def __iter__(self) -> Iterator[Trade]:
        return iter(self.trades())
