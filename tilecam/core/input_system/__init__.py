"""
Input configuration: key bindings loaded from YAML.
"""

from .key_config_loader import KeyConfigLoader, TriggerMode

__all__ = [
    'KeyConfigLoader',
    'TriggerMode',
]
