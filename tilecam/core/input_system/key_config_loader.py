"""
Key bindings loaded from ``assets/config/key_mappings.yaml``.

The file maps key names to action names under a trigger mode:

    bindings:
      held:            # fires every frame while the key is down
        RIGHT: pan_right
      pressed:         # fires once per key press
        EQUALS: zoom_in
    schemes:
      wasd:
        overrides:
          held:
            D: pan_right

A scheme's overrides are layered on top of the base bindings. If the file is
missing or unreadable the built-in bindings below are used instead.
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

from ..config import find_project_root, resolve_path
from ..input import Key

logger = logging.getLogger(__name__)

DEFAULT_KEY_CONFIG_PATH = "assets/config/key_mappings.yaml"
DEFAULT_SCHEME = "default"

# Key names that are not Key members
KEY_ALIASES = {
    "=": Key.EQUALS,
    "+": Key.EQUALS,
    "PLUS": Key.EQUALS,
    "-": Key.MINUS,
    "ESC": Key.ESCAPE,
}


class TriggerMode(Enum):
    HELD = "held"
    PRESSED = "pressed"


FALLBACK_BINDINGS: dict[TriggerMode, dict[Key, str]] = {
    TriggerMode.HELD: {
        Key.UP: "pan_up",
        Key.DOWN: "pan_down",
        Key.LEFT: "pan_left",
        Key.RIGHT: "pan_right",
    },
    TriggerMode.PRESSED: {
        Key.EQUALS: "zoom_in",
        Key.MINUS: "zoom_out",
        Key.ESCAPE: "quit",
    },
}


def parse_key(name: Any) -> Optional[Key]:
    """Look up a key by enum name or alias, case-insensitively."""
    normalized = str(name).strip().upper()
    key = KEY_ALIASES.get(normalized) or Key.__members__.get(normalized)
    if key is None:
        logger.warning("Unknown key '%s' in key config", name)
    return key


def _parse_mode(name: Any) -> Optional[TriggerMode]:
    try:
        return TriggerMode(str(name).lower())
    except ValueError:
        return None


class KeyConfigLoader:
    """Key-to-action bindings per trigger mode, with named override schemes."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_KEY_CONFIG_PATH
        self._raw: dict[str, Any] = {}
        self._bindings: dict[TriggerMode, dict[Key, str]] = {}
        self._active_scheme = DEFAULT_SCHEME

    @property
    def resolved_path(self) -> Path:
        """Config path, with relative paths taken from the project root."""
        return Path(resolve_path(self.config_path, find_project_root()))

    def load_config(self) -> bool:
        """Read the bindings file.

        Returns:
            True if the file was read. On a missing or malformed file the
            built-in bindings are installed and False is returned.
        """
        path = self.resolved_path
        if not path.exists():
            logger.warning("Key config not found at %s, using built-in bindings", path)
            self._use_fallback()
            return False

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            if not isinstance(raw, dict):
                raise ValueError("top level must be a mapping")
            self._raw = raw
            self._active_scheme = str((raw.get("config") or {}).get("active_scheme", DEFAULT_SCHEME))
            self._rebuild()
        except (OSError, yaml.YAMLError, AttributeError, ValueError) as e:
            logger.warning("Could not read key config %s: %s", path, e)
            self._use_fallback()
            return False

        return True

    def reload_config(self) -> bool:
        return self.load_config()

    def _use_fallback(self) -> None:
        self._raw = {}
        self._bindings = {mode: dict(mapping) for mode, mapping in FALLBACK_BINDINGS.items()}
        logger.info("Using built-in key bindings")

    def _scheme_overrides(self, scheme_name: str) -> dict[str, Any]:
        if scheme_name == DEFAULT_SCHEME:
            return {}
        scheme = (self._raw.get("schemes") or {}).get(scheme_name) or {}
        return scheme.get("overrides") or {}

    def _rebuild(self) -> None:
        """Recompute bindings from the raw file and the active scheme."""
        overrides = self._scheme_overrides(self._active_scheme)
        self._bindings = {}

        for mode_name, entries in (self._raw.get("bindings") or {}).items():
            mode = _parse_mode(mode_name)
            if mode is None:
                logger.warning("Unknown trigger mode '%s' in key config", mode_name)
                continue

            merged = dict(entries or {})
            merged.update(overrides.get(mode_name) or {})

            mapping = {}
            for key_name, action in merged.items():
                key = parse_key(key_name)
                if key is not None:
                    mapping[key] = str(action)
            self._bindings[mode] = mapping

    # Queries

    def get_key_mappings(self, mode: TriggerMode) -> dict[Key, str]:
        return dict(self._bindings.get(mode, {}))

    def get_action_for_key(self, key: Key, mode: TriggerMode) -> Optional[str]:
        return self._bindings.get(mode, {}).get(key)

    def get_keys_for_action(self, action: str) -> list[Key]:
        """Every key bound to ``action``, across all modes."""
        return [
            key
            for mapping in self._bindings.values()
            for key, bound in mapping.items()
            if bound == action
        ]

    # Schemes

    def get_available_schemes(self) -> list[str]:
        names = (self._raw.get("schemes") or {}).keys()
        return [DEFAULT_SCHEME] + [name for name in names if name != DEFAULT_SCHEME]

    def get_active_scheme(self) -> str:
        return self._active_scheme

    def set_active_scheme(self, scheme_name: str) -> bool:
        if scheme_name not in self.get_available_schemes():
            logger.warning("Unknown key scheme '%s'", scheme_name)
            return False

        self._active_scheme = scheme_name
        if self._raw:
            self._rebuild()
        return True

    def validate_config(self) -> dict[str, Any]:
        """Report missing or unknown binding modes and count the usable bindings."""
        bindings = self._raw.get("bindings") or {}
        errors = [
            f"Missing required binding mode: {mode.value}"
            for mode in TriggerMode
            if mode.value not in bindings
        ]
        warnings = [
            f"Unknown binding mode in config: {name}"
            for name in bindings
            if _parse_mode(name) is None
        ]

        total = sum(len(mapping) for mapping in self._bindings.values())
        if total == 0:
            errors.append("No valid key mappings found")

        return {
            "valid": not errors,
            "errors": errors,
            "warnings": warnings,
            "modes": len(self._bindings),
            "total_mappings": total,
            "active_scheme": self._active_scheme,
        }
