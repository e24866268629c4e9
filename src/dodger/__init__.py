"""Data manager for the Dodger arcade game."""

__version__ = "0.1.0"
