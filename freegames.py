#!/usr/bin/env python3
"""
FreeGames - FreeToGame catalog browser
Fetches the free-to-play PC game catalog, lists its genres and shows the games as cards.
"""

import json
import logging
import os
import sys
import argparse
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import requests
from colorama import init, Fore, Style

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the root FreeGames logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so normal use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger('freegames')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


# Module-level logger used throughout freegames.py
logger = setup_logging()


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

API_URL = "https://www.freetogame.com/api/games"
PROXY_URL = "https://api.allorigins.win/raw?url="
DEFAULT_PLATFORM = "pc"

DEFAULT_CONFIG: Dict = {
    'api_url': API_URL,
    'proxy_url': PROXY_URL,
    'platform': DEFAULT_PLATFORM,
    'language': 'en',
    'timeout': None,
    'log_level': None,
}

# config key -> environment variable that overrides it
_ENV_OVERRIDES = {
    'api_url': 'FREEGAMES_API_URL',
    'proxy_url': 'FREEGAMES_PROXY_URL',
    'platform': 'FREEGAMES_PLATFORM',
    'language': 'FREEGAMES_LANG',
    'timeout': 'FREEGAMES_TIMEOUT',
    'log_level': 'FREEGAMES_LOG_LEVEL',
}


def load_config(config_path: str = 'config.json') -> Dict:
    """Load configuration from JSON file with environment variable support

    A missing config file is not an error: the built-in defaults are used.
    Environment variables take precedence over config file values:
    - FREEGAMES_API_URL overrides api_url
    - FREEGAMES_PROXY_URL overrides proxy_url (empty string disables the relay)
    - FREEGAMES_PLATFORM overrides platform
    - FREEGAMES_LANG overrides language
    - FREEGAMES_TIMEOUT overrides timeout (seconds)
    - FREEGAMES_LOG_LEVEL overrides log_level
    """
    config = dict(DEFAULT_CONFIG)

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            print(f"{Fore.RED}Error parsing config file: {e}")
            sys.exit(1)
        if not isinstance(data, dict):
            print(f"{Fore.RED}Error parsing config file: expected a JSON object, got {type(data).__name__}")
            sys.exit(1)
        config.update(data)

    for key, env_name in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None:
            config[key] = value

    timeout = config.get('timeout')
    if timeout in ('', None):
        config['timeout'] = None
    else:
        try:
            config['timeout'] = float(timeout)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid timeout value: %r", timeout)
            config['timeout'] = None

    return config


def build_catalog_url(api_url: str = API_URL, platform: str = DEFAULT_PLATFORM,
                      proxy_url: str = PROXY_URL) -> str:
    """Return the full catalog URL, routed through *proxy_url* when set.

    The relay takes the target URL verbatim after its ``url=`` parameter.

    >>> build_catalog_url()
    'https://api.allorigins.win/raw?url=https://www.freetogame.com/api/games?platform=pc'
    """
    target = f"{api_url}?platform={platform}" if platform else api_url
    return f"{proxy_url}{target}" if proxy_url else target


# ---------------------------------------------------------------------------
# Errors and load outcome
# ---------------------------------------------------------------------------

class CatalogLoadError(Exception):
    """Base class for everything that can go wrong while loading the catalog."""


class TransportError(CatalogLoadError):
    """The request failed or the server answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SchemaError(CatalogLoadError):
    """The response body is not the expected JSON list of game objects."""


@dataclass
class LoadResult:
    """Outcome of one catalog load: the items, or an empty list plus the error."""
    items: List[Dict] = field(default_factory=list)
    error: Optional[CatalogLoadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Loading indicator
# ---------------------------------------------------------------------------

class LoadingIndicator:
    """Visibility flag for the "loading" message.

    Listeners are called with the new visibility on every change, which is
    how the UI adapters (and the tests) observe the indicator.
    """

    def __init__(self):
        self.visible = False
        self._listeners = []

    def subscribe(self, callback) -> None:
        self._listeners.append(callback)

    def show(self) -> None:
        self._set(True)

    def hide(self) -> None:
        self._set(False)

    def _set(self, visible: bool) -> None:
        self.visible = visible
        for callback in self._listeners:
            try:
                callback(visible)
            except Exception as e:
                logger.exception("Loading indicator listener failed: %s", e)


# ---------------------------------------------------------------------------
# FreeToGame API client
# ---------------------------------------------------------------------------

class FreeToGameClient:
    """Client for the FreeToGame public catalog API.

    One call to :meth:`load` performs exactly one GET request. Failures never
    escape: they are logged and returned inside the :class:`LoadResult`.
    """

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None,
                 indicator: Optional[LoadingIndicator] = None):
        self.url = url or build_catalog_url()
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.indicator = indicator if indicator is not None else LoadingIndicator()
        self._log = logging.getLogger('freegames.client')

    @classmethod
    def from_config(cls, config: Dict, **kwargs) -> 'FreeToGameClient':
        """Build a client from a :func:`load_config` dict."""
        url = build_catalog_url(
            api_url=config.get('api_url') or API_URL,
            platform=config.get('platform', DEFAULT_PLATFORM),
            proxy_url=config.get('proxy_url', PROXY_URL),
        )
        return cls(url=url, timeout=config.get('timeout'), **kwargs)

    def fetch_games(self) -> List[Dict]:
        """Fetch and validate the game list.

        Raises:
            TransportError: connection failure or non-success HTTP status.
            SchemaError: body is not JSON, not a list, or holds non-object entries.
        """
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to catalog failed: {e}") from e

        if not response.ok:
            raise TransportError(
                f"Catalog answered with HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SchemaError(f"Catalog body is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise SchemaError(
                f"Expected a list of games, got {type(data).__name__}")
        if not all(isinstance(game, dict) for game in data):
            raise SchemaError("Catalog list contains entries that are not objects")
        return data

    def load(self) -> LoadResult:
        """Load the catalog once, toggling the loading indicator around the call."""
        self.indicator.show()
        try:
            games = self.fetch_games()
            self._log.info("Loaded %d games from %s", len(games), self.url)
            return LoadResult(items=games)
        except CatalogLoadError as e:
            self._log.error("Catalog API call failed: %s", e)
            return LoadResult(error=e)
        except Exception as e:
            # Anything raised while decoding counts as a malformed body.
            self._log.exception("Unexpected error while loading catalog: %s", e)
            return LoadResult(error=SchemaError(str(e)))
        finally:
            self.indicator.hide()


# ---------------------------------------------------------------------------
# Terminal output
# ---------------------------------------------------------------------------

def print_view(view, selected: str = 'all') -> None:
    """Print a rendered view (see ``app.services.view_service``) to the terminal."""
    print(f"\n{Fore.GREEN}{'='*60}")
    print(f"{Fore.CYAN}{Style.BRIGHT}🎮 {view.count_label}"
          + (f"{Fore.WHITE} [{selected}]" if selected != 'all' else ''))
    print(f"{Fore.GREEN}{'='*60}")

    if view.placeholder:
        print(f"{Fore.YELLOW}{view.placeholder}")
        return

    for card in view.cards:
        print(f"{Fore.CYAN}{Style.BRIGHT}{card.title}")
        print(f"  {Fore.YELLOW}Genre: {Fore.WHITE}{card.genre}")
        print(f"  {Fore.YELLOW}Link: {Fore.WHITE}{card.detail_url}")
    print(f"{Fore.GREEN}{'='*60}\n")


def print_facets(options: List[Dict]) -> None:
    """Print the genre filter options, one per line."""
    for option in options:
        if option['value'] == option['label']:
            print(f"{Fore.WHITE}{option['value']}")
        else:
            print(f"{Fore.WHITE}{option['value']} {Fore.CYAN}({option['label']})")


def _announce_loading(visible: bool) -> None:
    if visible:
        print(f"{Fore.CYAN}Loading games...")


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='FreeGames - FreeToGame catalog browser',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 freegames.py                    # Show every game
  python3 freegames.py --genre Shooter    # Show only shooters
  python3 freegames.py --list-genres      # Show the genre filter options
  python3 freegames.py --demo             # Use the built-in offline catalog
        """
    )
    parser.add_argument(
        '--config', '-c',
        default='config.json',
        help='Path to config file (default: config.json)'
    )
    parser.add_argument(
        '--genre', '-g',
        default='all',
        help='Only show games of this genre (exact, case-sensitive match)'
    )
    parser.add_argument(
        '--list-genres',
        action='store_true',
        help='List the available genres and exit'
    )
    parser.add_argument(
        '--lang',
        help='Language for labels (e.g. en, es)'
    )
    parser.add_argument(
        '--demo',
        action='store_true',
        help='Use the built-in demo catalog instead of the live API'
    )
    parser.add_argument(
        '--log-level',
        help='Log level (DEBUG, INFO, WARNING, ERROR)'
    )

    args = parser.parse_args()

    config = load_config(args.config)
    if args.lang:
        config['language'] = args.lang
    setup_logging(args.log_level or config.get('log_level') or 'WARNING')

    # Imported here so ``app`` can import this module without a cycle.
    from app.services import CatalogBrowser
    from app.repositories import LocaleRepository

    session = None
    if args.demo:
        from demo import DemoSession
        session = DemoSession()

    indicator = LoadingIndicator()
    indicator.subscribe(_announce_loading)
    client = FreeToGameClient.from_config(config, session=session, indicator=indicator)
    strings = LocaleRepository().strings(config.get('language', 'en'))
    browser = CatalogBrowser(client, strings)

    browser.load()

    if args.list_genres:
        print_facets(browser.facet_options)
        return

    view = browser.on_facet_change(args.genre)
    print_view(view, selected=args.genre)


if __name__ == "__main__":
    main()
