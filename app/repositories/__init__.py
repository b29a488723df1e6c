"""Repository package — expose all concrete repositories from one import."""
from .locale_repository import LocaleRepository

__all__ = [
    'LocaleRepository',
]
