#!/usr/bin/env python3
"""
FreeGames Interactive Demo
==========================
Showcases the catalog browser without touching the network.  Run it with:

    python3 demo.py            # full showcase
    python3 demo.py --quiet    # minimal output (good for CI)

The demo exercises:
  • Loading the catalog (served by :class:`DemoSession`)
  • Genre facets
  • Filtering by genre, including a genre nobody has
  • The empty state after a failed load

``DemoSession`` is also what ``--demo`` plugs into ``freegames.py`` and
``freegames_gui.py``.
"""

import argparse
import time

from colorama import Fore, Style, init as _colorama_init

_colorama_init(autoreset=True)
_GREEN = Fore.GREEN
_CYAN = Fore.CYAN
_YELLOW = Fore.YELLOW
_BLUE = Fore.BLUE
_RESET = Style.RESET_ALL


# ---------------------------------------------------------------------------
# Demo catalog, same shape as https://www.freetogame.com/api/games
# ---------------------------------------------------------------------------
DEMO_GAMES = [
    {"id": 540, "title": "Overwatch 2",         "genre": "Shooter", "thumbnail": "https://www.freetogame.com/g/540/thumbnail.jpg", "game_url": "https://www.freetogame.com/open/overwatch-2"},
    {"id": 521, "title": "Diablo Immortal",     "genre": "MMOARPG", "thumbnail": "https://www.freetogame.com/g/521/thumbnail.jpg", "game_url": "https://www.freetogame.com/open/diablo-immortal"},
    {"id": 517, "title": "Lost Ark",            "genre": "ARPG",    "thumbnail": "https://www.freetogame.com/g/517/thumbnail.jpg", "game_url": "https://www.freetogame.com/open/lost-ark"},
    {"id": 516, "title": "PUBG: BATTLEGROUNDS", "genre": "Shooter", "thumbnail": "https://www.freetogame.com/g/516/thumbnail.jpg", "game_url": "https://www.freetogame.com/open/pubg"},
    {"id": 508, "title": "Enlisted",            "genre": "Shooter", "thumbnail": "https://www.freetogame.com/g/508/thumbnail.jpg", "game_url": "https://www.freetogame.com/open/enlisted"},
    {"id": 475, "title": "Genshin Impact",      "genre": "Action RPG", "thumbnail": "https://www.freetogame.com/g/475/thumbnail.jpg", "game_url": "https://www.freetogame.com/open/genshin-impact"},
    {"id": 466, "title": "Valorant",            "genre": "Shooter", "thumbnail": "https://www.freetogame.com/g/466/thumbnail.jpg", "game_url": "https://www.freetogame.com/open/valorant"},
    {"id": 452, "title": "Call Of Duty: Warzone", "genre": "Shooter", "thumbnail": "https://www.freetogame.com/g/452/thumbnail.jpg", "game_url": "https://www.freetogame.com/open/call-of-duty-warzone"},
    {"id": 428, "title": "Hearthstone",         "genre": "Card Game", "thumbnail": "https://www.freetogame.com/g/428/thumbnail.jpg", "game_url": "https://www.freetogame.com/open/hearthstone"},
    {"id": 57,  "title": "Path of Exile",       "genre": "ARPG",    "thumbnail": "https://www.freetogame.com/g/57/thumbnail.jpg",  "game_url": "https://www.freetogame.com/open/path-of-exile"},
    {"id": 23,  "title": "League of Legends",   "genre": "MOBA",    "thumbnail": "https://www.freetogame.com/g/23/thumbnail.jpg",  "game_url": "https://www.freetogame.com/open/league-of-legends"},
    {"id": 11,  "title": "Neverwinter",         "genre": "MMORPG",  "thumbnail": "https://www.freetogame.com/g/11/thumbnail.jpg",  "game_url": "https://www.freetogame.com/open/neverwinter"},
    {"id": 9,   "title": "World of Warships",   "genre": "Shooter", "thumbnail": "https://www.freetogame.com/g/9/thumbnail.jpg",   "game_url": "https://www.freetogame.com/open/world-of-warships"},
    {"id": 5,   "title": "Crossout",            "genre": "Shooter", "thumbnail": "https://www.freetogame.com/g/5/thumbnail.jpg",   "game_url": "https://www.freetogame.com/open/crossout"},
    {"id": 2,   "title": "World of Tanks",      "genre": "Shooter", "thumbnail": "https://www.freetogame.com/g/2/thumbnail.jpg",   "game_url": "https://www.freetogame.com/open/world-of-tanks"},
]


# ---------------------------------------------------------------------------
# requests.Session stand-in
# ---------------------------------------------------------------------------

class DemoResponse:
    """Just enough of ``requests.Response`` for ``FreeToGameClient``."""

    def __init__(self, body, status_code: int = 200):
        self._body = body
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class DemoSession:
    """Serves a canned response for every GET and records the requested URLs.

    Args:
        games:       Body to return (defaults to :data:`DEMO_GAMES`).
        status_code: HTTP status to report.
        delay:       Seconds to wait before answering, to make the loading
                     indicator visible in the web UI.
    """

    def __init__(self, games=None, status_code: int = 200, delay: float = 0.0):
        self.games = DEMO_GAMES if games is None else games
        self.status_code = status_code
        self.delay = delay
        self.requested = []

    def get(self, url, **kwargs):
        self.requested.append(url)
        if self.delay:
            time.sleep(self.delay)
        return DemoResponse(self.games, self.status_code)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _sep(char: str = "─", width: int = 60) -> str:
    return char * width


def _header(text: str) -> None:
    print()
    print(_CYAN + _sep("═") + _RESET)
    print(_CYAN + f"  {text}" + _RESET)
    print(_CYAN + _sep("═") + _RESET)


def _section(text: str) -> None:
    print()
    print(_YELLOW + _sep("─") + _RESET)
    print(_YELLOW + f"  {text}" + _RESET)
    print(_YELLOW + _sep("─") + _RESET)


def _ok(msg: str) -> None:
    print(_GREEN + f"  ✓ {msg}" + _RESET)


def _info(msg: str) -> None:
    print(f"    {msg}")


def _pause(quiet: bool, seconds: float = 0.4) -> None:
    if not quiet:
        time.sleep(seconds)


def _show(view, limit: int = 5) -> None:
    if view.placeholder:
        print(f"    ({view.placeholder})")
    for card in view.cards[:limit]:
        print(_BLUE + f"  🎮 {card.title}" + _RESET + f"  [{card.genre}]")
    if len(view.cards) > limit:
        print(f"    … and {len(view.cards) - limit} more")
    _ok(view.count_label)


def _make_browser(session: DemoSession, lang: str = 'en'):
    from freegames import FreeToGameClient
    from app.repositories import LocaleRepository
    from app.services import CatalogBrowser

    client = FreeToGameClient(session=session)
    return CatalogBrowser(client, LocaleRepository().strings(lang))


# ---------------------------------------------------------------------------
# Demo sections
# ---------------------------------------------------------------------------

def demo_load(quiet: bool):
    _section("📦 Loading the catalog")
    browser = _make_browser(DemoSession())
    result = browser.load()
    _ok(f"Loaded {len(result.items)} games (state: {browser.state})")
    _pause(quiet)
    return browser


def demo_facets(browser, quiet: bool) -> None:
    _section("🏷️  Genre facets")
    for option in browser.facet_options:
        _info(f"{option['value']:<12} → {option['label']}")
    _pause(quiet)


def demo_filters(browser, quiet: bool) -> None:
    _section("🎯 Filtering by genre")
    for genre in ('all', 'Shooter', 'MOBA', 'Racing'):
        _info(f"genre = {genre!r}")
        _show(browser.on_facet_change(genre))
        _pause(quiet)


def demo_failure(quiet: bool) -> None:
    _section("💥 API unavailable (HTTP 503), Spanish labels")
    browser = _make_browser(DemoSession(games=[], status_code=503), lang='es')
    result = browser.load()
    _info(f"error: {result.error}")
    _info(f"facets: {browser.facets}")
    _show(browser.view)
    _pause(quiet)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_demo(quiet: bool = False) -> None:
    _header("🎮  FreeGames — Interactive Demo")
    _info("Running in demo mode — no network access required.")

    browser = demo_load(quiet)
    demo_facets(browser, quiet)
    demo_filters(browser, quiet)
    demo_failure(quiet)

    print()
    print(_CYAN + _sep("═") + _RESET)
    print(_GREEN + "  ✅  Demo complete!  Ready to browse the live catalog?" + _RESET)
    print(_CYAN + _sep("─") + _RESET)
    print("  1. Run: python3 freegames.py --list-genres")
    print("  2. Run: python3 freegames_gui.py  →  http://127.0.0.1:5000")
    print(_CYAN + _sep("═") + _RESET)
    print()


def main() -> None:
    parser = argparse.ArgumentParser(
        description="FreeGames demo — showcase the browser without network access."
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Skip artificial delays (useful for CI / automated runs)",
    )
    args = parser.parse_args()
    run_demo(quiet=args.quiet)


if __name__ == "__main__":
    main()
