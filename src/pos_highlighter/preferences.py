from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Mapping, MutableMapping

import yaml

from .models import PosConfig


class HighlightPreferences:
    """
    Per-category on/off switches keyed by a style table setting key.

    Keys that were never stored count as enabled.
    """

    def __init__(self, values: Mapping[str, bool] | None = None) -> None:
        self._values: Dict[str, bool] = {
            str(key): bool(value) for key, value in (values or {}).items()
        }

    def is_enabled(self, setting_key: str) -> bool:
        return self._values.get(setting_key, True)

    def enabled_keys(self, pos_configs: Iterable[PosConfig]) -> set[str]:
        return {c.setting_key for c in pos_configs if self.is_enabled(c.setting_key)}

    def has_any_enabled(self, pos_configs: Iterable[PosConfig]) -> bool:
        return bool(self.enabled_keys(pos_configs))

    def set_enabled(self, setting_key: str, enabled: bool) -> None:
        self._values[setting_key] = enabled

    def toggle(self, setting_key: str) -> bool:
        """Flip one category and return its new state."""
        new_value = not self.is_enabled(setting_key)
        self._values[setting_key] = new_value
        return new_value

    def toggle_all(self, pos_configs: Iterable[PosConfig]) -> bool:
        """
        Switch every category off if any stored switch is on, otherwise on.

        Only stored values are consulted, so a fresh store turns everything on.
        """
        new_value = not any(self._values.values())
        for config in pos_configs:
            self._values[config.setting_key] = new_value
        return new_value

    def to_dict(self) -> Dict[str, bool]:
        return dict(self._values)


def preferences_from_yaml(path: str | Path) -> HighlightPreferences:
    """Load stored switches; a missing file yields an all-enabled store."""
    path = Path(path)
    if not path.exists():
        return HighlightPreferences()
    parsed = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Preferences YAML must define a mapping.")
    highlights = parsed.get("highlights", parsed)
    if not isinstance(highlights, MutableMapping):
        raise ValueError("Preferences 'highlights' entry must be a mapping.")
    return HighlightPreferences(highlights)


def save_preferences(preferences: HighlightPreferences, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"highlights": preferences.to_dict()}
    path.write_text(yaml.safe_dump(payload, sort_keys=True), encoding="utf-8")


def setting_keys(pos_configs: Iterable[PosConfig]) -> List[str]:
    return [config.setting_key for config in pos_configs]
