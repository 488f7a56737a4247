"""Configuration and service wiring."""

from .config import Settings, load_settings
from .container import Storefront, build_storefront

__all__ = ["Settings", "load_settings", "Storefront", "build_storefront"]
