# ovrstat/scraper/resolver.py
"""
Account resolution: does the tag exist, and is its career profile public?
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ovrstat.models import AccountCandidate

logger = logging.getLogger(__name__)

AccountSearch = Callable[[str], List[AccountCandidate]]


class AccountStatus(Enum):
    NOT_FOUND = "not_found"
    PRIVATE = "private"
    PUBLIC = "public"


@dataclass
class AccountResolution:
    status: AccountStatus
    display_name: str = ""
    canonical_tag: str = ""
    candidate: Optional[AccountCandidate] = None


def display_name_from_tag(tag: str) -> str:
    """'Name#1234' or 'Name-1234' -> 'Name'."""
    for sep in ("#", "-"):
        if sep in tag:
            return tag.rsplit(sep, 1)[0]
    return tag


def resolve_account(tag: str, search: AccountSearch) -> AccountResolution:
    """
    Decide whether `tag` is unknown, private or public.

    Only the first search candidate is considered. Errors raised by `search`
    propagate unchanged.
    """
    candidates = search(tag)
    if not candidates:
        logger.info("No account found for '%s'", tag)
        return AccountResolution(status=AccountStatus.NOT_FOUND, canonical_tag=tag)

    candidate = candidates[0]
    canonical = candidate.battle_tag or tag
    status = AccountStatus.PUBLIC if candidate.is_public else AccountStatus.PRIVATE
    logger.debug("Resolved '%s' to '%s' (%s)", tag, canonical, status.value)
    return AccountResolution(
        status=status,
        display_name=display_name_from_tag(canonical),
        canonical_tag=canonical,
        candidate=candidate,
    )
