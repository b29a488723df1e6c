"""View models for the game grid and the pure functions that build them.

The UI adapters (the Jinja template in ``freegames_gui`` and
``freegames.print_view``) only translate these objects into output.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

LINK_TARGET = '_blank'
# Keeps the opened page from reading the referrer or scripting window.opener
LINK_REL = 'noopener noreferrer'


@dataclass
class CardViewModel:
    """Presentation-ready game card."""
    title: str
    genre: str
    thumbnail_url: str
    detail_url: str
    image_alt: str
    target: str = LINK_TARGET
    rel: str = LINK_REL

    def to_dict(self) -> Dict[str, str]:
        return {
            'title': self.title,
            'genre': self.genre,
            'thumbnail_url': self.thumbnail_url,
            'detail_url': self.detail_url,
            'image_alt': self.image_alt,
            'target': self.target,
            'rel': self.rel,
        }


@dataclass
class RenderedView:
    """Everything shown in the results area and the counter label."""
    cards: List[CardViewModel] = field(default_factory=list)
    count: int = 0
    count_label: str = ''
    placeholder: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def to_dict(self) -> Dict:
        return {
            'cards': [card.to_dict() for card in self.cards],
            'count': self.count,
            'count_label': self.count_label,
            'placeholder': self.placeholder,
        }


def build_card(item: Dict) -> CardViewModel:
    """Map one catalog item to a card."""
    # null JSON values render as empty text
    title = item.get('title') or ''
    return CardViewModel(
        title=title,
        genre=item.get('genre') or '',
        thumbnail_url=item.get('thumbnail') or '',
        detail_url=item.get('game_url') or '',
        image_alt=title,
    )


def build_cards(items: List[Dict]) -> List[CardViewModel]:
    """One card per item, in input order."""
    return [build_card(item) for item in items]


def format_count(count: int, strings: Dict[str, str]) -> str:
    """Return ``"<count> <unit>"``, singular only when *count* is exactly 1."""
    unit = strings['count_singular'] if count == 1 else strings['count_plural']
    return f"{count} {unit}"


def render(items: List[Dict], strings: Dict[str, str]) -> RenderedView:
    """Build a fresh view for *items*.

    An empty input yields no cards and the ``no_results`` placeholder.
    """
    cards = build_cards(items)
    return RenderedView(
        cards=cards,
        count=len(cards),
        count_label=format_count(len(cards), strings),
        placeholder=None if cards else strings['no_results'],
    )
