"""Repository for UI translation files (locales/<lang>.json)."""
import os
from typing import Dict, List, Optional

from .base import BaseRepository

DEFAULT_LOCALES_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    'locales')
DEFAULT_LANG = 'en'

# Used when even the default locale file is unavailable.
FALLBACK_STRINGS: Dict[str, str] = {
    'title': 'Free-to-play games',
    'genre_label': 'Genre',
    'all_genres': 'All genres',
    'count_singular': 'game',
    'count_plural': 'games',
    'no_results': 'No games found. The API may be unavailable.',
    'loading': 'Loading...',
}


class LocaleRepository(BaseRepository):
    """Reads locale files.

    Schema::

        {
          "lang": "en",
          "lang_name": "English",
          "catalog": {"all_genres": "...", "count_singular": "...", ...}
        }
    """

    def __init__(self, directory: str = DEFAULT_LOCALES_DIR) -> None:
        super().__init__(directory)

    def find(self, lang: str) -> Optional[Dict]:
        """Return the full locale document for *lang*, or ``None``."""
        # Strip directory components so *lang* can't escape the locales dir
        safe_lang = os.path.basename(lang or '')[:10]
        if not safe_lang:
            return None
        data = self._load(f'{safe_lang}.json', None)
        if not isinstance(data, dict):
            return None
        return data

    def list_locales(self) -> List[Dict[str, str]]:
        """Return ``[{"lang": ..., "lang_name": ...}, ...]`` sorted by file name."""
        locales = []
        try:
            names = sorted(os.listdir(self._dir))
        except OSError as exc:
            self._log.error('Error listing locales: %s', exc)
            return locales
        for fname in names:
            if not fname.endswith('.json'):
                continue
            data = self.find(fname[:-5])
            if data and 'lang' in data:
                locales.append({'lang': data['lang'],
                                'lang_name': data.get('lang_name', data['lang'])})
        return locales

    def strings(self, lang: str = DEFAULT_LANG) -> Dict[str, str]:
        """Return the catalog strings for *lang*, falling back to English.

        Keys missing from a translation are filled from the fallback set.
        """
        data = self.find(lang)
        if data is None and lang != DEFAULT_LANG:
            self._log.warning("Locale '%s' not found, using '%s'", lang, DEFAULT_LANG)
            data = self.find(DEFAULT_LANG)
        merged = dict(FALLBACK_STRINGS)
        if data:
            merged.update(data.get('catalog', {}))
        return merged
