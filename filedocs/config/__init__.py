"""Configuration package.

Note: Do not import and construct settings at package import time to keep
test collection free from environment requirements. Import from
``filedocs.config.settings`` directly where needed.
"""

from .store_config import StoreConfig

__all__: list[str] = ["StoreConfig"]
