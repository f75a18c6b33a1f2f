"""Falling-block puzzle games for the terminal: boards, blocks, rendering and two games."""

__version__ = "0.1.0"