"""
Reconciliation of a discovered candidate against the stored record.

Decision table:
    no stored record                              -> CREATE
    stored non-English, candidate English         -> FULL_REPLACE (stored date kept)
    stored record missing urlBase                 -> PATCH (only urlBase copied)
    anything else                                 -> SKIP
"""

import enum
from dataclasses import dataclass
from typing import Optional

from candidate import WallpaperImage
from markets import is_english_market, is_non_english_market


class Action(enum.Enum):
    CREATE = "create"
    SKIP = "skip"
    PATCH = "patch"
    FULL_REPLACE = "full_replace"


@dataclass
class Decision:
    action: Action
    record: Optional[WallpaperImage] = None

    @property
    def needs_write(self) -> bool:
        return self.action is not Action.SKIP


def decide(existing: Optional[WallpaperImage], candidate: WallpaperImage) -> Decision:
    if existing is None:
        return Decision(Action.CREATE, candidate)

    needs_url_base = not existing.url_base
    needs_upgrade = is_non_english_market(existing.market) and is_english_market(candidate.market)

    if needs_upgrade:
        # dates never change once recorded
        return Decision(Action.FULL_REPLACE, candidate.copy(date=existing.date))
    if needs_url_base:
        return Decision(Action.PATCH, existing.copy(url_base=candidate.url_base))
    return Decision(Action.SKIP)
