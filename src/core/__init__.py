"""
AvatarProxy - Core Module
=========================
"""

from src.core.config import Config, load_config, LOGS_DIR, ROOT_DIR
from src.core.logger import log

__all__ = ["Config", "load_config", "log", "LOGS_DIR", "ROOT_DIR"]
