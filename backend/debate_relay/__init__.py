"""Debate Relay: two text-generation backends taking turns on a topic."""

__version__ = "0.1.0"
