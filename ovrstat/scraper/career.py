# ovrstat/scraper/career.py

from __future__ import annotations

import logging
from typing import Optional

from bs4 import Tag

from ovrstat.models import CAREER_CATEGORIES, CareerStats, CareerStatsBuilder
from ovrstat.parser import clean_json_key, clean_value, parse_type, transform_key
from ovrstat.selectors import CURRENT_PROFILE, SelectorProfile
from .heroes import parse_option_labels

logger = logging.getLogger(__name__)


def container_option_id(container: Tag, profile: SelectorProfile = CURRENT_PROFILE) -> Optional[str]:
    """Option id from a container class list like ['stats-container', 'option-0']."""
    prefix = profile.stats_container_id_prefix
    for cls in container.get("class") or []:
        if cls.startswith(prefix) and len(cls) > len(prefix):
            return cls[len(prefix):]
    return None


def parse_career_stats(section: Optional[Tag], profile: SelectorProfile = CURRENT_PROFILE) -> CareerStats:
    """
    Parse the career stat tables of one game mode.

    Returns hero key -> category -> stat key -> value. Containers whose option
    id has no dropdown entry and categories outside CAREER_CATEGORIES are
    skipped.
    """
    builder = CareerStatsBuilder()
    if section is None:
        return builder.build()

    heroes = parse_option_labels(section, profile)

    for container in section.select(profile.stats_container):
        option_id = container_option_id(container, profile)
        hero = clean_json_key(heroes.get(option_id, "")) if option_id is not None else ""
        if not hero:
            logger.debug("Skipping stats container with unknown option id %r", option_id)
            continue

        for block in container.select(profile.category_block):
            header = block.select_one(profile.category_header)
            category = clean_json_key(header.get_text(strip=True) if header is not None else "")
            if category not in CAREER_CATEGORIES:
                continue

            for row in block.select(profile.stat_row):
                name = row.select_one(profile.stat_name)
                value = row.select_one(profile.stat_value)
                if name is None or value is None:
                    continue
                key = transform_key(clean_json_key(name.get_text(strip=True)), profile.key_renames)
                if not key:
                    continue
                builder.set(hero, category, key, parse_type(clean_value(value.get_text())))

    return builder.build()
