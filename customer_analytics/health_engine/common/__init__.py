"""
Common utilities for the customer health engine.
"""

from .data_loader import DataLoader
from .preprocessing import Preprocessor, parse_numeric
from .reporting import Reporter
from .settings import EngineSettings, load_settings
from .dispatch import ActionDispatcher

__all__ = [
    "DataLoader",
    "Preprocessor",
    "parse_numeric",
    "Reporter",
    "EngineSettings",
    "load_settings",
    "ActionDispatcher",
]
