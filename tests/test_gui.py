#!/usr/bin/env python3
"""
Tests for the Flask routes in freegames_gui.py:
* GET /                 (HTML page)
* GET /api/status
* GET /api/genres
* GET /api/games
* GET /api/i18n, /api/i18n/<lang>

Run with:
    python -m pytest tests/test_gui.py
"""
import json
import logging
import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import freegames
import freegames_gui
from app.repositories import LocaleRepository
from app.services import CatalogBrowser
from demo import DEMO_GAMES, DemoSession


def _loaded_browser(session=None, config_path='does-not-exist.json'):
    """Build a browser synchronously without touching the global instance."""
    with patch.object(freegames_gui, 'browser', None):
        return freegames_gui.initialize_browser(
            config_path=config_path, session=session or DemoSession(), background=False)


class _RouteTestCase(unittest.TestCase):

    def setUp(self):
        freegames_gui.app.config['TESTING'] = True
        self.client = freegames_gui.app.test_client()


class TestInitializeBrowser(unittest.TestCase):

    def test_synchronous_load(self):
        session = DemoSession()
        browser = _loaded_browser(session)
        self.assertTrue(browser.is_ready)
        self.assertEqual(len(browser.items), len(DEMO_GAMES))
        self.assertEqual(len(session.requested), 1)

    def test_background_load_finishes(self):
        with patch.object(freegames_gui, 'browser', None):
            browser = freegames_gui.initialize_browser(
                config_path='does-not-exist.json', session=DemoSession())
            self.assertIs(freegames_gui.browser, browser)
        for thread in list(freegames_gui.threading.enumerate()):
            if thread.name == 'freegames_load':
                thread.join(timeout=5)
        self.assertTrue(browser.is_ready)


class TestNotInitialized(_RouteTestCase):

    def test_status_503(self):
        with patch.object(freegames_gui, 'browser', None):
            resp = self.client.get('/api/status')
        self.assertEqual(resp.status_code, 503)
        self.assertFalse(json.loads(resp.data)['ready'])

    def test_games_503(self):
        with patch.object(freegames_gui, 'browser', None):
            resp = self.client.get('/api/games')
        self.assertEqual(resp.status_code, 503)

    def test_index_503(self):
        with patch.object(freegames_gui, 'browser', None):
            resp = self.client.get('/')
        self.assertEqual(resp.status_code, 503)


class TestLoadedRoutes(_RouteTestCase):

    def setUp(self):
        super().setUp()
        self.browser = _loaded_browser()
        self._patch = patch.object(freegames_gui, 'browser', self.browser)
        self._patch.start()

    def tearDown(self):
        self._patch.stop()

    def test_status(self):
        data = json.loads(self.client.get('/api/status').data)
        self.assertEqual(data['state'], 'loaded')
        self.assertTrue(data['ready'])
        self.assertFalse(data['loading'])
        self.assertEqual(data['total'], len(DEMO_GAMES))

    def test_genres(self):
        data = json.loads(self.client.get('/api/genres').data)
        expected = ['all'] + sorted({g['genre'] for g in DEMO_GAMES})
        self.assertEqual(data['facets'], expected)
        self.assertEqual(data['options'][0], {'value': 'all', 'label': 'All genres'})

    def test_games_default_all(self):
        data = json.loads(self.client.get('/api/games').data)
        self.assertEqual(data['genre'], 'all')
        self.assertEqual(data['count'], len(DEMO_GAMES))
        self.assertEqual([c['title'] for c in data['cards']], [g['title'] for g in DEMO_GAMES])
        self.assertIsNone(data['placeholder'])

    def test_games_filtered(self):
        data = json.loads(self.client.get('/api/games?genre=MOBA').data)
        self.assertEqual([c['title'] for c in data['cards']], ['League of Legends'])
        self.assertEqual(data['count_label'], '1 game')

    def test_games_unknown_genre(self):
        resp = self.client.get('/api/games?genre=Racing')
        self.assertEqual(resp.status_code, 200)
        data = json.loads(resp.data)
        self.assertEqual(data['cards'], [])
        self.assertEqual(data['count_label'], '0 games')
        self.assertTrue(data['placeholder'])

    def test_index_renders_cards(self):
        resp = self.client.get('/')
        self.assertEqual(resp.status_code, 200)
        html = resp.data.decode('utf-8')
        self.assertIn('Overwatch 2', html)
        self.assertIn('rel="noopener noreferrer"', html)
        self.assertIn('target="_blank"', html)
        self.assertIn(f'{len(DEMO_GAMES)} games', html)
        self.assertIn('<option value="all" selected>All genres</option>', html)

    def test_index_filter(self):
        html = self.client.get('/?genre=MOBA').data.decode('utf-8')
        self.assertIn('League of Legends', html)
        self.assertNotIn('Overwatch 2', html)
        self.assertIn('<option value="MOBA" selected>MOBA</option>', html)

    def test_index_hides_loading_indicator_when_ready(self):
        html = self.client.get('/').data.decode('utf-8')
        self.assertIn('id="mensaje-cargando" style="display: none"', html)


class TestFailedLoadRoutes(_RouteTestCase):

    def setUp(self):
        super().setUp()
        self.browser = _loaded_browser(DemoSession(games={'error': 'x'}))
        self._patch = patch.object(freegames_gui, 'browser', self.browser)
        self._patch.start()

    def tearDown(self):
        self._patch.stop()

    def test_status_reports_failure(self):
        data = json.loads(self.client.get('/api/status').data)
        self.assertEqual(data['state'], 'load_failed')
        self.assertTrue(data['ready'])
        self.assertTrue(data['error'])

    def test_only_all_facet(self):
        data = json.loads(self.client.get('/api/genres').data)
        self.assertEqual(data['facets'], ['all'])

    def test_index_shows_placeholder(self):
        html = self.client.get('/').data.decode('utf-8')
        self.assertIn('mensaje-no-juegos', html)
        self.assertIn('0 games', html)


class TestLoadingPage(_RouteTestCase):
    """The page keeps refreshing until the browser is ready."""

    def test_idle_page_refreshes(self):
        browser = CatalogBrowser(freegames.FreeToGameClient(session=DemoSession()),
                                 LocaleRepository().strings('en'))
        with patch.object(freegames_gui, 'browser', browser):
            html = self.client.get('/').data.decode('utf-8')
        self.assertIn('http-equiv="refresh"', html)
        self.assertIn('id="mensaje-cargando" style="display: block"', html)

    def test_page_refreshes_after_indicator_hidden_before_state_swap(self):
        pages = []
        browser = CatalogBrowser(freegames.FreeToGameClient(session=DemoSession()),
                                 LocaleRepository().strings('en'))

        def _on_indicator(visible):
            if not visible:
                pages.append((browser.state,
                              self.client.get('/').data.decode('utf-8')))

        browser._client.indicator.subscribe(_on_indicator)
        with patch.object(freegames_gui, 'browser', browser):
            browser.load()
            final = self.client.get('/').data.decode('utf-8')

        self.assertEqual(len(pages), 1)
        state, html = pages[0]
        self.assertEqual(state, 'loading')
        self.assertIn('http-equiv="refresh"', html)
        self.assertIn('id="mensaje-cargando" style="display: block"', html)
        self.assertNotIn('http-equiv="refresh"', final)
        self.assertIn('Overwatch 2', final)


class TestConfigLogLevel(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self._env = os.environ.pop('FREEGAMES_LOG_LEVEL', None)
        self._level = logging.getLogger('freegames').level

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)
        logging.getLogger('freegames').setLevel(self._level)
        if self._env is not None:
            os.environ['FREEGAMES_LOG_LEVEL'] = self._env

    def test_log_level_from_config_file(self):
        path = os.path.join(self.tmp, 'config.json')
        with open(path, 'w') as f:
            json.dump({'log_level': 'DEBUG'}, f)
        _loaded_browser(config_path=path)
        self.assertEqual(logging.getLogger('freegames').level, logging.DEBUG)

    def test_no_log_level_keeps_current(self):
        logging.getLogger('freegames').setLevel(logging.ERROR)
        _loaded_browser()
        self.assertEqual(logging.getLogger('freegames').level, logging.ERROR)


class TestI18nEndpoints(_RouteTestCase):

    def test_list_locales_contains_en_and_es(self):
        data = json.loads(self.client.get('/api/i18n').data)
        langs = [item['lang'] for item in data['locales']]
        self.assertIn('en', langs)
        self.assertIn('es', langs)

    def test_get_spanish_locale(self):
        resp = self.client.get('/api/i18n/es')
        self.assertEqual(resp.status_code, 200)
        data = json.loads(resp.data)
        self.assertEqual(data['lang_name'], 'Español')
        self.assertEqual(data['catalog']['all_genres'], 'Todos los géneros')

    def test_missing_locale_returns_404(self):
        resp = self.client.get('/api/i18n/zz')
        self.assertEqual(resp.status_code, 404)
        self.assertIn('error', json.loads(resp.data))

    def test_path_traversal_rejected(self):
        resp = self.client.get('/api/i18n/../../etc/passwd')
        self.assertIn(resp.status_code, (400, 404))


if __name__ == '__main__':
    unittest.main()
