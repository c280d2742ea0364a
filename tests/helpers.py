# tests/helpers.py

import json
import os
from typing import List, Optional

from bs4 import BeautifulSoup

from ovrstat.models import AccountCandidate

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), 'fixtures')


def load_fixture(filename: str) -> str:
    with open(os.path.join(FIXTURES_DIR, filename), 'r', encoding='utf-8') as f:
        return f.read()


def load_document(filename: str = 'profile_public.html') -> BeautifulSoup:
    return BeautifulSoup(load_fixture(filename), 'html.parser')


def load_candidates(filename: str = 'search_public.json') -> List[AccountCandidate]:
    return [AccountCandidate.from_payload(item) for item in json.loads(load_fixture(filename))]


def private_candidate(battle_tag: str = 'Hidden#4242', portrait: str = '') -> AccountCandidate:
    return AccountCandidate(battle_tag=battle_tag, url=battle_tag.replace('#', '-'), is_public=False, portrait=portrait)


class FakeClient:
    """
    Stand-in for BlizzardAPIClient that records every call.

    `search_error` / `fetch_error` are raised instead of returning data.
    """

    def __init__(
        self,
        candidates: Optional[List[AccountCandidate]] = None,
        html: str = '',
        search_error: Optional[BaseException] = None,
        fetch_error: Optional[BaseException] = None,
    ):
        self.candidates = candidates if candidates is not None else []
        self.html = html
        self.search_error = search_error
        self.fetch_error = fetch_error
        self.searched: List[str] = []
        self.fetched: List[str] = []

    def search_accounts(self, tag: str) -> List[AccountCandidate]:
        self.searched.append(tag)
        if self.search_error is not None:
            raise self.search_error
        return list(self.candidates)

    def fetch_document(self, url: str) -> str:
        self.fetched.append(url)
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.html


def public_client(html_fixture: str = 'profile_public.html') -> FakeClient:
    return FakeClient(candidates=load_candidates(), html=load_fixture(html_fixture))


def minimal_profile_html(view_body: str, filters: str = '<div id="mouseKeyboardFilter" class="Profile-player--filter">PC</div>') -> str:
    """A career page with an empty masthead and one mouseKeyboard view holding `view_body`."""
    return f"""
<html><body>
<blz-section class="Profile-masthead">
  <h1 class="Profile-player--name">Mini</h1>
  <div class="Profile-player--filters">{filters}</div>
</blz-section>
<div class="mouseKeyboard-view Profile-view">{view_body}</div>
</body></html>
"""
