# ovrstat/selectors.py
"""
Selector profiles describing where each field lives in the career page markup.

The career page has gone through several full rewrites. Each rewrite gets its
own SelectorProfile; extraction code only ever reads selectors from the
profile it is handed, so supporting a new markup generation means adding a
profile here rather than touching the extractors.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Pattern, Tuple


@dataclass(frozen=True)
class SelectorProfile:
    """CSS selectors, attribute names and icon patterns for one markup generation."""

    version: str

    # Document-level anchors
    not_found_heading: str
    not_found_text: str
    masthead: str

    # Platform filter tabs and views. `{platform}` is the internal platform id.
    platform_filter: str
    platform_filter_suffix: str
    platform_view: str
    platform_rank_wrapper: str

    # Masthead identity
    portrait: str
    name: str
    title: str
    endorsement_icon: str

    # Ratings, scoped to the platform rank wrapper
    role_wrapper: str
    role_icon: str
    rank_icon: str

    # Game mode sections inside a platform view. `{mode}` is the mode id.
    hero_summary_section: str
    career_section: str

    # Hero summary widgets
    dropdown_option: str
    progress_group: str
    progress_group_id_attr: str
    progress_bar: str
    progress_bar_title: str
    progress_bar_value: str

    # Career stat tables
    stats_container: str
    stats_container_id_prefix: str
    category_block: str
    category_header: str
    stat_row: str
    stat_name: str
    stat_value: str

    # Competitive season marker
    season_marker: str
    season_attr: str

    endorsement_pattern: Pattern = field(repr=False)
    rank_pattern: Pattern = field(repr=False)

    mode_ids: Tuple[str, str] = ("quickPlay", "competitive")
    key_renames: Dict[str, str] = field(default_factory=dict)
    platform_aliases: Dict[str, str] = field(default_factory=dict)


PLATFORM_PC = "pc"
PLATFORM_CONSOLE = "console"
PLATFORM_XBL = "xbl"
PLATFORM_PSN = "psn"
PLATFORM_NS = "nintendo-switch"

PLATFORM_ALIASES = {
    PLATFORM_PC: "mouseKeyboard",
    PLATFORM_CONSOLE: "controller",
    PLATFORM_XBL: "controller",
    PLATFORM_PSN: "controller",
    PLATFORM_NS: "controller",
}

CAREER_KEY_RENAMES = {
    "multikillBest": "multiKillBest",
    "multikills": "multiKills",
}

CURRENT_PROFILE = SelectorProfile(
    version="2023-10",
    not_found_heading="[slot=heading]",
    not_found_text="Page Not Found",
    masthead=".Profile-masthead",
    platform_filter=".Profile-player--filters .Profile-player--filter",
    platform_filter_suffix="Filter",
    platform_view=".{platform}-view.Profile-view",
    platform_rank_wrapper=".Profile-playerSummary--rankWrapper.{platform}-view",
    portrait=".Profile-player--portrait",
    name=".Profile-player--name",
    title=".Profile-player--title",
    endorsement_icon=".Profile-playerSummary--endorsement",
    role_wrapper=".Profile-playerSummary--roleWrapper",
    role_icon=".Profile-playerSummary--role img",
    rank_icon="img.Profile-playerSummary--rank",
    hero_summary_section=".Profile-heroSummary--view.{mode}-view",
    career_section=".stats.{mode}-view",
    dropdown_option=".Profile-dropdown option",
    progress_group=".Profile-progressBars",
    progress_group_id_attr="data-category-id",
    progress_bar=".Profile-progressBar",
    progress_bar_title=".Profile-progressBar-title",
    progress_bar_value=".Profile-progressBar-description",
    stats_container="span.stats-container",
    stats_container_id_prefix="option-",
    category_block=".category",
    category_header=".content .header p",
    stat_row=".content .stat-item",
    stat_name=".name",
    stat_value=".value",
    season_marker="[data-competitive-season]",
    season_attr="data-competitive-season",
    endorsement_pattern=re.compile(r"/(\d+)-([a-z0-9]+)\.svg"),
    rank_pattern=re.compile(r"([a-zA-Z0-9]+)Tier-(\d)-([a-z\d]+)\.(svg|png)"),
    key_renames=CAREER_KEY_RENAMES,
    platform_aliases=PLATFORM_ALIASES,
)
