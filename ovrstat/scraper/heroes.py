# ovrstat/scraper/heroes.py

from __future__ import annotations

import logging
from typing import Dict, Optional

from bs4 import Tag

from ovrstat.models import TopHeroStats
from ovrstat.parser import clean_json_key, parse_float, parse_int
from ovrstat.selectors import CURRENT_PROFILE, SelectorProfile

logger = logging.getLogger(__name__)


def _set_time_played(stats: TopHeroStats, value: str) -> None:
    stats.time_played = value


def _set_games_won(stats: TopHeroStats, value: str) -> None:
    stats.games_won = parse_int(value)


def _set_win_percentage(stats: TopHeroStats, value: str) -> None:
    stats.win_percentage = parse_int(value)


def _set_weapon_accuracy(stats: TopHeroStats, value: str) -> None:
    stats.weapon_accuracy = parse_int(value)


def _set_critical_hit_accuracy(stats: TopHeroStats, value: str) -> None:
    stats.critical_hit_accuracy = parse_int(value)


def _set_eliminations_per_life(stats: TopHeroStats, value: str) -> None:
    stats.eliminations_per_life = parse_float(value)


def _set_multi_kill_best(stats: TopHeroStats, value: str) -> None:
    stats.multi_kill_best = parse_int(value)


def _set_objective_kills(stats: TopHeroStats, value: str) -> None:
    stats.objective_kills = parse_float(value)


# Normalized dropdown label -> field setter
CATEGORY_SETTERS = {
    "timePlayed": _set_time_played,
    "gamesWon": _set_games_won,
    "winPercentage": _set_win_percentage,
    "weaponAccuracy": _set_weapon_accuracy,
    "criticalHitAccuracy": _set_critical_hit_accuracy,
    "eliminationsPerLife": _set_eliminations_per_life,
    "multikillBest": _set_multi_kill_best,
    "objectiveKills": _set_objective_kills,
}


def parse_option_labels(section: Tag, profile: SelectorProfile = CURRENT_PROFILE) -> Dict[str, str]:
    """Map dropdown option values (the site's internal ids) to their labels."""
    labels: Dict[str, str] = {}
    for option in section.select(profile.dropdown_option):
        value = option.get("value")
        if value is None:
            continue
        labels[str(value).strip()] = option.get_text(strip=True)
    return labels


def parse_hero_stats(section: Optional[Tag], profile: SelectorProfile = CURRENT_PROFILE) -> Dict[str, TopHeroStats]:
    """
    Parse the top heroes widget of one game mode.

    Args:
        section: The mode's hero summary element, or None if the page lacks one
        profile: Selector profile for the page's markup generation

    Returns:
        Hero key -> TopHeroStats. Categories the site adds later are ignored.
    """
    heroes: Dict[str, TopHeroStats] = {}
    if section is None:
        return heroes

    categories = parse_option_labels(section, profile)

    for group in section.select(profile.progress_group):
        category_id = str(group.get(profile.progress_group_id_attr) or "").strip()
        setter = CATEGORY_SETTERS.get(clean_json_key(categories.get(category_id, "")))
        if setter is None:
            logger.debug("Ignoring hero summary category '%s'", category_id)
            continue

        for bar in group.select(profile.progress_bar):
            title = bar.select_one(profile.progress_bar_title)
            value = bar.select_one(profile.progress_bar_value)
            hero = clean_json_key(title.get_text(strip=True) if title is not None else "")
            if not hero:
                continue
            stats = heroes.setdefault(hero, TopHeroStats())
            setter(stats, value.get_text(strip=True) if value is not None else "")

    return heroes
