"""
Base exception for the stat engine.
"""


class StatEngineError(Exception):
    """Base class for errors raised by stat_engine."""
