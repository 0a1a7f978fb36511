"""Persistent application settings restricted to a registered set of names."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from .constants import APPLICATION_NAME, ORGANIZATION_NAME


class SettingVariantType(Enum):
    """The kind of value a registered setting holds."""

    INT = 0
    BOOLEAN = 1


@dataclass(frozen=True)
class SettingInfo:
    """Type and default value of a registered setting."""

    type: SettingVariantType
    default_value: Any


_REGISTERED_SETTINGS: dict[str, SettingInfo] = {
    "new_day_offset": SettingInfo(SettingVariantType.BOOLEAN, False),
    "enable_theo_graph_sg": SettingInfo(SettingVariantType.BOOLEAN, False),
    "theo_graph_daily_result_sg": SettingInfo(SettingVariantType.INT, 1),
    "x_tick_combo_box_indx_rrg": SettingInfo(SettingVariantType.INT, 0),
    "n_days_spin_box_rrg": SettingInfo(SettingVariantType.INT, 0),
}

# Types a stored value may have for each kind of setting.
_CONVERTIBLE = {
    SettingVariantType.INT: (bool, int, float, str),
    SettingVariantType.BOOLEAN: (bool, int, float, str),
}


def _default_path() -> Path:
    return Path(user_config_dir(APPLICATION_NAME, ORGANIZATION_NAME)) / "settings.json"


def _check_value(kind: SettingVariantType, value: Any) -> None:
    if not isinstance(value, _CONVERTIBLE[kind]):
        raise TypeError(f"value {value!r} cannot be used as a {kind.name} setting")


class Settings:
    """Settings stored as ``group/name`` keys in a JSON file.

    Only registered names are accepted, and each value must be convertible to
    the type the name was registered with. Groups are free-form.
    """

    _instance: Settings | None = None

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path is not None else _default_path()
        self._registered = dict(_REGISTERED_SETTINGS)
        self._values = self._load()

    @classmethod
    def instance(cls) -> Settings:
        """Return the process-wide settings object stored at the default path."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def setting_info(self, name: str) -> SettingInfo:
        """Return the registration of ``name``; raise KeyError if unknown."""
        try:
            return self._registered[name]
        except KeyError:
            raise KeyError(f"setting {name!r} is not registered") from None

    def set_setting(self, group: str, name: str, value: Any) -> None:
        """Store ``value`` for ``name`` in ``group`` and write the file."""
        info = self.setting_info(name)
        _check_value(info.type, value)
        self._values[f"{group}/{name}"] = value
        self._save()

    def get_setting(self, group: str, name: str) -> Any:
        """Return the stored value, or the registered default."""
        info = self.setting_info(name)
        value = self._values.get(f"{group}/{name}", info.default_value)
        _check_value(info.type, value)
        return value

    def _load(self) -> dict[str, Any]:
        try:
            with self.path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except (FileNotFoundError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp = self.path.with_suffix(self.path.suffix + ".tmp")
        with temp.open("w", encoding="utf-8") as handle:
            json.dump(self._values, handle, indent=2, sort_keys=True)
        os.replace(temp, self.path)