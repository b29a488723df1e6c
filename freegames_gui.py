#!/usr/bin/env python3
"""
FreeGames GUI - Web-based interface for the FreeToGame catalog browser
Serves the game grid with a genre filter, plus a small JSON API over the same state.
"""

import logging
import argparse
import threading
import os
from typing import Optional, Dict
from flask import Flask, render_template, jsonify, request
from dotenv import load_dotenv

import freegames
from app.repositories import LocaleRepository
from app.services import ALL_GENRES, CatalogBrowser

load_dotenv()

# Initialize logging early so client and browser logs are captured
log_level = os.getenv('FREEGAMES_LOG_LEVEL', 'INFO')
freegames_logger = freegames.setup_logging(log_level)
gui_logger = logging.getLogger('freegames.gui')
gui_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
try:
    os.makedirs('logs', exist_ok=True)
    fh = logging.FileHandler('logs/freegames_gui.log')
    fh.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s %(name)s: %(message)s'))
    fh.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    gui_logger.addHandler(fh)
except OSError:
    gui_logger.warning('Could not create log file handler')

app = Flask(__name__)

locale_repository = LocaleRepository()

# Global catalog browser instance (one page view's worth of state)
browser: Optional[CatalogBrowser] = None
browser_lock = threading.Lock()


def initialize_browser(config_path: str = 'config.json', session=None,
                       background: bool = True) -> CatalogBrowser:
    """Create the catalog browser and start its one-time load.

    Args:
        config_path: Path to the optional JSON config file.
        session:     ``requests.Session``-like object (``DemoSession`` in demo mode).
        background:  Load on a daemon thread so the page can show the loading
                     indicator; ``False`` loads before returning.

    Returns:
        The new :class:`CatalogBrowser`.
    """
    global browser
    config = freegames.load_config(config_path)
    if config.get('log_level'):
        freegames.setup_logging(config['log_level'])
        gui_logger.setLevel(getattr(logging, config['log_level'].upper(), logging.INFO))
    client = freegames.FreeToGameClient.from_config(config, session=session)
    client.indicator.subscribe(
        lambda visible: gui_logger.info('Loading indicator %s', 'shown' if visible else 'hidden'))
    strings = locale_repository.strings(config.get('language', 'en'))
    new_browser = CatalogBrowser(client, strings)
    with browser_lock:
        browser = new_browser

    if background:
        threading.Thread(target=new_browser.load, name='freegames_load', daemon=True).start()
    else:
        new_browser.load()
    return new_browser


def _current_browser() -> Optional[CatalogBrowser]:
    with browser_lock:
        return browser


def _not_ready():
    return jsonify({'ready': False, 'message': 'Catalog browser not initialized'}), 503


@app.route('/')
def index():
    """Main page: genre select, results grid, counter and loading indicator."""
    current = _current_browser()
    if current is None:
        return render_template('index.html', browser=None, strings=locale_repository.strings(),
                               view=None, options=[], selected=ALL_GENRES), 503

    selected = request.args.get('genre', ALL_GENRES)
    view = current.on_facet_change(selected)
    return render_template(
        'index.html',
        browser=current,
        strings=current.strings,
        view=view,
        options=current.facet_options,
        selected=selected,
    )


@app.route('/api/status')
def api_status():
    """Get lifecycle state of the catalog browser"""
    current = _current_browser()
    if current is None:
        return _not_ready()
    return jsonify(current.status())


@app.route('/api/genres')
def api_genres():
    """Return the genre facets and their select options.

    Example response::

        {"facets": ["all", "MMORPG", "Shooter"],
         "options": [{"value": "all", "label": "All genres"}, ...]}
    """
    current = _current_browser()
    if current is None:
        return _not_ready()
    return jsonify({'facets': current.facets, 'options': current.facet_options})


@app.route('/api/games')
def api_games():
    """Return the rendered view for ``?genre=`` (default ``all``)."""
    current = _current_browser()
    if current is None:
        return _not_ready()
    selected = request.args.get('genre', ALL_GENRES)
    view = current.on_facet_change(selected)
    payload: Dict = view.to_dict()
    payload['genre'] = selected
    payload['loading'] = current.loading
    return jsonify(payload)


# ---------------------------------------------------------------------------
# Localization / i18n endpoints
# ---------------------------------------------------------------------------

@app.route('/api/i18n')
def api_i18n_list():
    """List all available locales.

    Returns a JSON array of objects with ``lang`` and ``lang_name`` fields,
    e.g. ``[{"lang": "en", "lang_name": "English"}, ...]``.
    """
    return jsonify({'locales': locale_repository.list_locales()})


@app.route('/api/i18n/<lang>')
def api_i18n_get(lang: str):
    """Return the translation strings for *lang* (e.g. ``en``, ``es``).

    A ``404`` is returned when the requested language is not available.
    """
    data = locale_repository.find(lang)
    if data is None:
        return jsonify({'error': f"Locale '{lang}' not found"}), 404
    return jsonify(data)


def main():
    """Main entry point for GUI"""
    parser = argparse.ArgumentParser(description='FreeGames Web GUI')
    parser.add_argument('--config', default='config.json', help='Path to config file')
    parser.add_argument('--demo', action='store_true', help='Run with demo data')
    parser.add_argument('--host', default='127.0.0.1', help='Interface to bind')
    parser.add_argument('--port', type=int, default=5000, help='Port to listen on')
    args = parser.parse_args()

    session = None
    if args.demo:
        from demo import DemoSession
        session = DemoSession(delay=1.5)

    initialize_browser(config_path=args.config, session=session)

    print("\n" + "="*60)
    print("🎮 FreeGames Web GUI is starting...")
    print("="*60)
    print("\nOpen your browser and go to:")
    print(f"  http://{args.host}:{args.port}")
    print("\nPress Ctrl+C to stop the server")
    print("="*60 + "\n")

    try:
        app.run(host=args.host, port=args.port, debug=False)
    except KeyboardInterrupt:
        print("\n\n" + "="*60)
        print("🛑 FreeGames Web GUI stopped")
        print("="*60 + "\n")


if __name__ == "__main__":
    main()
