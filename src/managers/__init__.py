"""
Managers for configuration and player construction
"""

from .config_manager import ConfigManager
from .player_manager import PlayerManager

__all__ = ['ConfigManager', 'PlayerManager']
