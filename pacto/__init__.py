"""
Pacto Puntos: a two-person favors and points ledger

This module provides:
- Favor logging and review by the other participant (approve or dispute)
- Point balances derived from approved favors and approved redemptions
- Redemptions capped at three per local day and by available balance
- Time-gated visibility of the other participant's pending favors
- Pluggable storage: in-memory or a single JSON document
"""

from .models import (
    Participant,
    FavorStatus,
    RedemptionStatus,
    Decision,
    FavorRecord,
    RedemptionRecord,
    Ledger,
)
from .service import LedgerService, InMemoryStorage
from .storage import JsonFileStorage

__all__ = [
    "Participant",
    "FavorStatus",
    "RedemptionStatus",
    "Decision",
    "FavorRecord",
    "RedemptionRecord",
    "Ledger",
    "LedgerService",
    "InMemoryStorage",
    "JsonFileStorage",
]
