"""Text-processing helpers for an IRC bot: calculators, decisions, factoids, karma and more."""

__version__ = "0.1.0"