"""Tic Tac Toe game engine: board rules, minimax opponent and game sessions."""

__version__ = "1.0.0"
