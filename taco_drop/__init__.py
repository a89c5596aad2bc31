"""Taco Drop - a proximity-driven falling-taco game."""

__version__ = "0.1.0"
