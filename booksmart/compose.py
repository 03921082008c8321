"""
Label composition: build the new display name from a book's tags.
"""

from .settings import (
    EncapsulatingCharacters,
    LabelFormat,
    LabelPosition,
    Settings,
    require,
)

ENCAPSULATION = {
    EncapsulatingCharacters.ANGLE: ("<", ">"),
    EncapsulatingCharacters.BRACE: ("{", "}"),
    EncapsulatingCharacters.PAREN: ("(", ")"),
    EncapsulatingCharacters.BRACKET: ("[", "]"),
    EncapsulatingCharacters.STAR: ("*", "*"),
}

TAG_SEPARATOR = "/"


def star_name(existing_name: str, settings: Settings) -> str:
    """Mark a name with a single star, whatever the number of tags."""
    position = require(LabelPosition, settings.labelPosition, "labelPosition")
    if position is LabelPosition.BEFORE:
        return f"*{existing_name}"
    return f"{existing_name}*"


def wrap_label(existing_name: str, label: str, settings: Settings) -> str:
    """Wrap a joined label and place it next to the name."""
    characters = require(EncapsulatingCharacters, settings.encapsulatingCharacters,
                         "encapsulatingCharacters")
    open_char, close_char = ENCAPSULATION[characters]

    position = require(LabelPosition, settings.labelPosition, "labelPosition")
    if position is LabelPosition.BEFORE:
        return f"{open_char}{label}{close_char} {existing_name}"
    return f"{existing_name} {open_char}{label}{close_char}"


def compose_name(existing_name: str, tags: list[str], settings: Settings) -> str:
    """New display name for a book carrying the given tags."""
    label_format = require(LabelFormat, settings.labelFormat, "labelFormat")
    if label_format is LabelFormat.STAR:
        return star_name(existing_name, settings)
    return wrap_label(existing_name, TAG_SEPARATOR.join(tags), settings)
