"""Converter configuration."""

from .settings import ConversionSettings, DEFAULT_SETTINGS, load_settings

__all__ = ['ConversionSettings', 'DEFAULT_SETTINGS', 'load_settings']
