"""Configuration module for the course marketplace."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]
