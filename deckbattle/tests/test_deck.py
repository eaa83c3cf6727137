"""
Tests for the deck engine.

Tests:
- Drawing from the tail of the draw pile
- Reshuffling the discard pile
- Pile contents are preserved
"""

from collections import Counter

from ..catalog import CardTemplate
from ..engine_core.deck import CardInstance, DeckEngine
from ..engine_core.events import EventKind
from ..engine_core.rng import seeded_source


def make_cards(n):
    template = CardTemplate("strike", "Strike", cost=1, damage=6)
    return [CardInstance(instance_id=f"card-{i}", template=template) for i in range(n)]


def all_ids(deck):
    return Counter(c.instance_id for c in deck.all_cards())


class TestDeckEngine:
    """Tests for DeckEngine."""

    def test_initialize_copies_and_clears(self, events):
        cards = make_cards(6)
        deck = DeckEngine(seeded_source(1), events)
        deck.hand = cards[:1]
        deck.initialize(cards)

        assert len(deck.draw_pile) == 6
        assert deck.hand == []
        assert deck.discard_pile == []
        assert deck.draw_pile is not cards

    def test_draw_takes_from_tail(self, events):
        deck = DeckEngine(seeded_source(1), events)
        deck.initialize(make_cards(6))
        top = deck.draw_pile[-1]

        assert deck.draw(1) == [top]
        assert deck.hand == [top]

    def test_draw_preserves_multiset(self, events):
        """Drawing n with enough cards yields n in hand and keeps every card."""
        deck = DeckEngine(seeded_source(2), events)
        deck.initialize(make_cards(8))
        before = all_ids(deck)

        deck.draw(3)
        deck.discard_all()
        deck.draw(7)

        assert len(deck.hand) == 7
        assert all_ids(deck) == before

    def test_reshuffle_when_draw_pile_empty(self, events):
        deck = DeckEngine(seeded_source(3), events)
        deck.initialize(make_cards(5))
        deck.draw(5)
        deck.discard_all()

        drawn = deck.draw(2)

        assert len(drawn) == 2
        assert len(deck.draw_pile) == 3
        assert deck.discard_pile == []
        reshuffles = [e for e in events.log if e.kind == EventKind.RESHUFFLE_OCCURRED]
        assert len(reshuffles) == 1
        assert reshuffles[0].payload == {"cards": 5}

    def test_draw_stops_when_both_piles_empty(self, events):
        deck = DeckEngine(seeded_source(4), events)
        deck.initialize(make_cards(2))

        assert len(deck.draw(5)) == 2
        assert events.log == []

    def test_remove_and_discard(self, events):
        deck = DeckEngine(seeded_source(5), events)
        deck.initialize(make_cards(3))
        deck.draw(3)
        card = deck.hand[0]

        assert deck.remove_from_hand(card.instance_id) is card
        assert deck.remove_from_hand(card.instance_id) is None
        deck.discard(card)
        assert deck.discard_pile == [card]

    def test_discard_all_on_empty_hand(self, events):
        deck = DeckEngine(seeded_source(6), events)
        deck.discard_all()
        assert deck.discard_pile == []

    def test_copies_are_distinct_instances(self, events):
        cards = make_cards(2)
        assert cards[0].card_id == cards[1].card_id
        assert cards[0] != cards[1]
