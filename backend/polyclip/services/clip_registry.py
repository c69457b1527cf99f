"""
In‑memory registry of step ledgers for step‑by‑step playback.

The HTTP layer runs the clipper once per request and keeps the
resulting :class:`StepLedger` here under a random identifier so that a
client can walk through the steps later with ``next``/``reset``
requests.  Entries live only in process memory.

The registry is an ``OrderedDict`` with least‑recently‑used eviction.
When the number of ledgers exceeds ``MAX_LEDGER_ENTRIES`` the oldest
entry is dropped.  A reentrant lock protects the dictionary and the
cursor of each stored ledger, because request handlers may run on
different threads.

Usage::

    from .clip_registry import store_ledger, advance_ledger
    ledger_id = store_ledger(ledger)
    state = advance_ledger(ledger_id)
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from threading import RLock
from typing import Optional, Tuple

from .geometry import Point
from .step_ledger import ClipStep, StepLedger

logger = logging.getLogger(__name__)

_ledgers: "OrderedDict[str, StepLedger]" = OrderedDict()
_lock = RLock()
# Maximum number of ledgers kept alive at once.
MAX_LEDGER_ENTRIES: int = 64


def store_ledger(ledger: StepLedger) -> str:
    """Register ``ledger`` and return its new identifier."""
    ledger_id = uuid.uuid4().hex
    with _lock:
        _ledgers[ledger_id] = ledger
        _ledgers.move_to_end(ledger_id)
        while len(_ledgers) > MAX_LEDGER_ENTRIES:
            evicted, _ = _ledgers.popitem(last=False)
            logger.debug("ledger %s evicted from registry", evicted)
    return ledger_id


def get_ledger(ledger_id: str) -> Optional[StepLedger]:
    """Return the ledger stored under ``ledger_id`` or ``None``."""
    with _lock:
        ledger = _ledgers.get(ledger_id)
        if ledger is not None:
            _ledgers.move_to_end(ledger_id)
        return ledger


@dataclass(frozen=True)
class PlaybackState:
    """Cursor position of a stored ledger, captured under the registry lock.

    Attributes:
        cursor: Index of the current step, ``-1`` before the first step.
        total_steps: Number of steps in the ledger.
        step: Step under the cursor, if any.
        finished: True when the last ``advance`` ran past the final step.
        result: Final polygon of the run, filled in once ``finished``.
    """

    cursor: int
    total_steps: int
    step: Optional[ClipStep] = None
    finished: bool = False
    result: Tuple[Point, ...] = ()


def _snapshot(ledger: StepLedger, finished: bool = False) -> PlaybackState:
    return PlaybackState(
        cursor=ledger.cursor,
        total_steps=ledger.total_steps(),
        step=ledger.current(),
        finished=finished,
        result=tuple(ledger.final_polygon()) if finished else (),
    )


def advance_ledger(ledger_id: str) -> Optional[PlaybackState]:
    """Move the cursor of a stored ledger forward by one step.

    Returns:
        ``None`` when the ledger is unknown, otherwise the playback state
        after the move.  ``finished`` is set once playback has run past
        the last step; the cursor then stays on that step.
    """
    with _lock:
        ledger = get_ledger(ledger_id)
        if ledger is None:
            return None
        step = ledger.next()
        return _snapshot(ledger, finished=step is None)


def rewind_ledger(ledger_id: str) -> Optional[PlaybackState]:
    """Reset the cursor of a stored ledger; ``None`` when unknown."""
    with _lock:
        ledger = get_ledger(ledger_id)
        if ledger is None:
            return None
        ledger.reset()
        return _snapshot(ledger)


def clear_registry() -> None:
    """Drop every stored ledger."""
    with _lock:
        _ledgers.clear()


__all__ = [
    "MAX_LEDGER_ENTRIES",
    "PlaybackState",
    "store_ledger",
    "get_ledger",
    "advance_ledger",
    "rewind_ledger",
    "clear_registry",
]
