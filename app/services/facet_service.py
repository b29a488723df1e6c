"""Genre facets derived from the loaded catalog."""
from typing import Dict, List

ALL_GENRES = 'all'


def build_facets(items: List[Dict]) -> List[str]:
    """Return ``["all", <distinct genres sorted>]`` for *items*.

    Items without a string ``genre`` contribute nothing.
    """
    genres = {item.get('genre') for item in items}
    return [ALL_GENRES] + sorted(g for g in genres if isinstance(g, str))


def facet_options(facets: List[str], strings: Dict[str, str]) -> List[Dict[str, str]]:
    """Turn *facets* into select options (``{"value": ..., "label": ...}``).

    The label equals the value except for the ``"all"`` marker, which uses
    the localized ``all_genres`` string.
    """
    options = []
    for facet in facets:
        label = strings.get('all_genres', facet) if facet == ALL_GENRES else facet
        options.append({'value': facet, 'label': label})
    return options


def filter_by_genre(items: List[Dict], genre: str) -> List[Dict]:
    """Return *items* whose genre equals *genre* exactly, or all of them for ``"all"``."""
    if genre == ALL_GENRES:
        return list(items)
    return [item for item in items if item.get('genre') == genre]
