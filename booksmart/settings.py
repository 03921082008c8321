"""
Patcher settings loaded from settings.json.
"""

import json
import logging
import unicodedata
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class LabelFormat(Enum):
    LONG = "Long"
    SHORT = "Short"
    STAR = "Star"


class LabelPosition(Enum):
    BEFORE = "Before"
    AFTER = "After"


class EncapsulatingCharacters(Enum):
    ANGLE = "Angle"
    BRACE = "Brace"
    PAREN = "Paren"
    BRACKET = "Bracket"
    STAR = "Star"


# Names used by the original French settings file
_ALIASES: dict[type[Enum], dict[str, Enum]] = {
    LabelFormat: {
        "court": LabelFormat.SHORT,
        "étoile": LabelFormat.STAR,
    },
    LabelPosition: {
        "avant": LabelPosition.BEFORE,
        "après": LabelPosition.AFTER,
    },
    EncapsulatingCharacters: {
        "chevrons": EncapsulatingCharacters.ANGLE,
        "accolades": EncapsulatingCharacters.BRACE,
        "parenthèses": EncapsulatingCharacters.PAREN,
        "crochets": EncapsulatingCharacters.BRACKET,
        "étoiles": EncapsulatingCharacters.STAR,
    },
}


def parse_choice(enum_cls: type[Enum], value: Any, key: str) -> Enum:
    """Parse a settings value into a member of enum_cls."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = unicodedata.normalize("NFC", value.strip()).casefold()
        for member in enum_cls:
            if member.value.casefold() == wanted or member.name.casefold() == wanted:
                return member
        if wanted in _ALIASES.get(enum_cls, {}):
            return _ALIASES[enum_cls][wanted]
    allowed = ", ".join(m.value for m in enum_cls)
    raise ConfigurationError(f"{key}: unsupported value {value!r} (expected one of {allowed})")


def require(enum_cls: type[Enum], value: Any, key: str) -> Enum:
    """Guard used at every switch over a settings enum."""
    if not isinstance(value, enum_cls):
        raise ConfigurationError(f"{key}: unsupported value {value!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Immutable run configuration."""
    addSkillLabels: bool = True
    addMapMarkerLabels: bool = True
    addQuestLabels: bool = True
    assumeBookScriptsAreQuests: bool = False
    labelFormat: LabelFormat = LabelFormat.LONG
    labelPosition: LabelPosition = LabelPosition.BEFORE
    encapsulatingCharacters: EncapsulatingCharacters = EncapsulatingCharacters.BRACKET

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Build settings from a parsed JSON object, validating every value."""
        if not isinstance(data, dict):
            raise ConfigurationError("settings must be a JSON object")

        known = {f.name: f for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning("Ignoring unknown setting %r", key)

        values: dict[str, Any] = {}
        for name, field in known.items():
            if name not in data:
                continue
            raw = data[name]
            if isinstance(field.default, bool):
                if not isinstance(raw, bool):
                    raise ConfigurationError(f"{name}: expected true or false, got {raw!r}")
                values[name] = raw
            else:
                values[name] = parse_choice(type(field.default), raw, name)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.value if isinstance(value, Enum) else value
        return result


def load_settings(path: Path | None) -> Settings:
    """Read settings.json; a missing file means all defaults."""
    if path is None or not path.exists():
        logger.info("No settings file found, using defaults")
        return Settings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path}: invalid JSON ({e})") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"{path}: not UTF-8 text ({e})") from e
    except OSError as e:
        raise ConfigurationError(f"{path}: cannot read settings ({e.strerror or e})") from e

    return Settings.from_dict(data)
