"""Deckbattle test suite."""
