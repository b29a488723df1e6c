"""Services package — expose all concrete services from one import."""
from .catalog_service import CatalogBrowser
from .facet_service import ALL_GENRES, build_facets, facet_options, filter_by_genre
from .view_service import CardViewModel, RenderedView, build_cards, format_count, render

__all__ = [
    'CatalogBrowser',
    'ALL_GENRES',
    'build_facets',
    'facet_options',
    'filter_by_genre',
    'CardViewModel',
    'RenderedView',
    'build_cards',
    'format_count',
    'render',
]
