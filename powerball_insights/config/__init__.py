"""Configuration package for the Powerball analysis system."""

from .settings import settings, PowerballSettings

__all__ = [
    'settings',
    'PowerballSettings'
]
