"""
Deck Engine - Draw pile, hand and discard pile.

Cards are drawn one at a time from the tail of the draw pile. When the
draw pile runs out, the discard pile is shuffled into it and a
reshuffle notification is emitted. Running out of both piles only
shortens the draw.
"""

from __future__ import annotations
from dataclasses import dataclass

from loguru import logger

from ..catalog.templates import CardTemplate
from .events import BattleEvent, EventChannel
from .rng import RandomDraw, shuffle


@dataclass(frozen=True)
class CardInstance:
    """
    A card in a battle deck.

    Two copies of the same template are distinct instances.
    """
    instance_id: str
    template: CardTemplate

    @property
    def card_id(self) -> str:
        return self.template.card_id


class DeckEngine:
    """Owns the three piles of one battle."""

    def __init__(self, random_draw: RandomDraw, events: EventChannel):
        self._random_draw = random_draw
        self._events = events
        self.draw_pile: list[CardInstance] = []
        self.hand: list[CardInstance] = []
        self.discard_pile: list[CardInstance] = []

    def initialize(self, cards: list[CardInstance]) -> None:
        """Set the draw pile to a shuffled copy of `cards`; clear hand and discard."""
        self.draw_pile = shuffle(list(cards), self._random_draw)
        self.hand = []
        self.discard_pile = []

    def draw(self, n: int) -> list[CardInstance]:
        """Draw up to `n` cards into the hand. Returns the cards drawn."""
        drawn = []
        for _ in range(n):
            if not self.draw_pile:
                if not self.discard_pile:
                    logger.debug("both piles empty, drew {} of {}", len(drawn), n)
                    break
                self._reshuffle()
            card = self.draw_pile.pop()
            self.hand.append(card)
            drawn.append(card)
        return drawn

    def _reshuffle(self) -> None:
        count = len(self.discard_pile)
        self.draw_pile = shuffle(self.discard_pile, self._random_draw)
        self.discard_pile = []
        logger.debug("reshuffled {} cards into the draw pile", count)
        self._events.emit(BattleEvent.reshuffle_occurred(count))

    def remove_from_hand(self, instance_id: str) -> CardInstance | None:
        for i, card in enumerate(self.hand):
            if card.instance_id == instance_id:
                return self.hand.pop(i)
        return None

    def find_in_hand(self, instance_id: str) -> CardInstance | None:
        for card in self.hand:
            if card.instance_id == instance_id:
                return card
        return None

    def discard(self, card: CardInstance) -> None:
        self.discard_pile.append(card)

    def discard_all(self) -> None:
        """Move the whole hand to the discard pile. Safe on an empty hand."""
        self.discard_pile.extend(self.hand)
        self.hand = []

    def all_cards(self) -> list[CardInstance]:
        return [*self.draw_pile, *self.hand, *self.discard_pile]

    def piles(self) -> tuple[list[CardInstance], list[CardInstance], list[CardInstance]]:
        return self.draw_pile, self.hand, self.discard_pile
