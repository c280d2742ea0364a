# ovrstat/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ovrstat.parser import StatValue

CAREER_CATEGORIES = (
    "assists",
    "average",
    "best",
    "combat",
    "game",
    "heroSpecific",
    "matchAwards",
    "miscellaneous",
    "deaths",
)

ALL_HEROES_KEY = "allHeroes"

CareerStats = Dict[str, Dict[str, Dict[str, StatValue]]]


@dataclass
class Rating:
    group: str = ""
    tier: int = 0
    role: str = ""
    role_icon: str = ""
    rank_icon: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group,
            "tier": self.tier,
            "role": self.role,
            "roleIcon": self.role_icon,
            "rankIcon": self.rank_icon,
        }


@dataclass
class TopHeroStats:
    """Headline numbers shown in the top heroes widget for a single hero."""

    time_played: str = ""
    games_won: int = 0
    win_percentage: int = 0
    weapon_accuracy: int = 0
    critical_hit_accuracy: int = 0
    eliminations_per_life: float = 0.0
    multi_kill_best: int = 0
    objective_kills: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timePlayed": self.time_played,
            "gamesWon": self.games_won,
            "winPercentage": self.win_percentage,
            "weaponAccuracy": self.weapon_accuracy,
            "criticalHitAccuracy": self.critical_hit_accuracy,
            "eliminationsPerLife": self.eliminations_per_life,
            "multiKillBest": self.multi_kill_best,
            "objectiveKills": self.objective_kills,
        }


class CareerStatsBuilder:
    """
    Accumulates career stats as hero -> category -> stat key -> value.

    Category buckets are created on first write, so a category that never
    appears in the document never shows up in the result.
    """

    def __init__(self):
        self._stats: CareerStats = {}

    def bucket(self, hero: str, category: str) -> Dict[str, StatValue]:
        """Return the mutable bucket for (hero, category), creating it if needed."""
        hero_stats = self._stats.setdefault(hero, {})
        return hero_stats.setdefault(category, {})

    def set(self, hero: str, category: str, key: str, value: StatValue) -> None:
        self.bucket(hero, category)[key] = value

    def build(self) -> CareerStats:
        return self._stats


@dataclass
class StatsCollection:
    season: Optional[int] = None
    top_heroes: Dict[str, TopHeroStats] = field(default_factory=dict)
    career_stats: CareerStats = field(default_factory=dict)

    def game_stat(self, key: str) -> int:
        """Integer value of an `allHeroes.game` stat, or 0 when absent or non-integer."""
        value = self.career_stats.get(ALL_HEROES_KEY, {}).get("game", {}).get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.season is not None:
            out["season"] = self.season
        out["topHeroes"] = {hero: stats.to_dict() for hero, stats in self.top_heroes.items()}
        out["careerStats"] = {
            hero: {category: dict(values) for category, values in categories.items() if values}
            for hero, categories in self.career_stats.items()
        }
        return out


@dataclass
class PlayerStats:
    """All stats for one player on one platform."""

    icon: str = ""
    name: str = ""
    title: str = ""
    endorsement: int = 0
    endorsement_icon: str = ""
    ratings: List[Rating] = field(default_factory=list)
    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    private: bool = False
    quick_play_stats: StatsCollection = field(default_factory=StatsCollection)
    competitive_stats: StatsCollection = field(default_factory=StatsCollection)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "icon": self.icon,
            "name": self.name,
            "title": self.title,
            "endorsement": self.endorsement,
            "endorsementIcon": self.endorsement_icon,
            "ratings": [rating.to_dict() for rating in self.ratings],
            "gamesPlayed": self.games_played,
            "gamesWon": self.games_won,
            "gamesLost": self.games_lost,
            "private": self.private,
            "quickPlayStats": self.quick_play_stats.to_dict(),
            "competitiveStats": self.competitive_stats.to_dict(),
        }


@dataclass
class AccountCandidate:
    """One entry from the account search endpoint."""

    battle_tag: str = ""
    url: str = ""
    is_public: bool = False
    portrait: str = ""
    frame: str = ""
    namecard: str = ""
    title: str = ""
    last_updated: int = 0

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AccountCandidate":
        def _text(key: str) -> str:
            value = payload.get(key)
            return "" if value is None else str(value)

        last_updated = payload.get("lastUpdated")
        return cls(
            battle_tag=_text("battleTag") or _text("name"),
            url=_text("url"),
            is_public=bool(payload.get("isPublic", False)),
            portrait=_text("portrait"),
            frame=_text("frame"),
            namecard=_text("namecard"),
            title=_text("title"),
            last_updated=last_updated if isinstance(last_updated, int) else 0,
        )
