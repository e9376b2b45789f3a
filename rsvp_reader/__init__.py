"""RSVP speed-reading core: tokenizer, ORP splitter and reader engine."""

__version__ = "0.1.0"
