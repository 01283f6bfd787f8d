"""Textual-powered interactive board."""

from .app import PokerGridApp, run_textual_app

__all__ = ["PokerGridApp", "run_textual_app"]
