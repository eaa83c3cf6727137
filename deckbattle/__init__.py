"""
Deckbattle - Turn-based card battle engine

A deterministic battle-resolution core for a browser deck-building game.
The engine provides:
- Deck, hand and discard pile lifecycle
- Card effect resolution and combat arithmetic
- Enemy intent selection
- Player/enemy turn state machine
- Battle outcome and campaign bookkeeping

Presentation (sprites, tweens, sound) lives outside the engine and talks
to it through inbound actions and outbound notifications.
"""

__version__ = "0.1.0"
