"""Chat text components and their JSON form."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None


def _to_enum(enum_cls: type[enum.Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValueError(f"unknown {enum_cls.__name__} value {value!r}") from None


def _put_present(target: dict, **values: Any) -> dict:
    target.update((key, value) for key, value in values.items() if value is not None)
    return target


class TextComponentNbtSource(enum.Enum):
    """Where an NBT component takes its data from."""

    BLOCK = "block"
    ENTITY = "entity"
    STORAGE = "storage"


class NamedColor(enum.Enum):
    """The sixteen named chat colours."""

    BLACK = "black"
    DARK_BLUE = "dark_blue"
    DARK_GREEN = "dark_green"
    DARK_AQUA = "dark_aqua"
    DARK_RED = "dark_red"
    DARK_PURPLE = "dark_purple"
    GOLD = "gold"
    GRAY = "gray"
    DARK_GRAY = "dark_gray"
    BLUE = "blue"
    GREEN = "green"
    AQUA = "aqua"
    RED = "red"
    LIGHT_PURPLE = "light_purple"
    YELLOW = "yellow"
    WHITE = "white"


Color = Union[NamedColor, str]
"""A named colour, or any other string (such as ``#ff0000``)."""


def _color_to_json(color: Color) -> str:
    return color.value if isinstance(color, NamedColor) else color


def _color_from_json(value: Any) -> Color:
    if not isinstance(value, str):
        raise ValueError(f"colour must be a string, got {value!r}")
    try:
        return NamedColor(value)
    except ValueError:
        return value


@dataclass
class TextComponentScoreboard:
    """A scoreboard entry reference."""

    name: str
    objective: str


@dataclass
class TextContent:
    """Plain text."""

    TYPE: ClassVar[str] = "text"
    text: str

    def to_dict(self) -> dict:
        return {"text": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> TextContent:
        return cls(_require(data, "text"))


@dataclass
class TranslatableContent:
    """A translation key with arguments."""

    TYPE: ClassVar[str] = "translatable"
    translate: str
    fallback: str
    with_: list[TextComponent] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "translate": self.translate,
            "fallback": self.fallback,
            "with": [item.to_dict() for item in self.with_],
        }

    @classmethod
    def from_dict(cls, data: dict) -> TranslatableContent:
        return cls(
            _require(data, "translate"),
            _require(data, "fallback"),
            [TextComponent.from_dict(item) for item in _require(data, "with")],
        )


@dataclass
class ScoreContent:
    """A scoreboard value."""

    TYPE: ClassVar[str] = "score"
    score: TextComponentScoreboard

    def to_dict(self) -> dict:
        return {"score": {"name": self.score.name, "objective": self.score.objective}}

    @classmethod
    def from_dict(cls, data: dict) -> ScoreContent:
        score = _require(data, "score")
        return cls(
            TextComponentScoreboard(_require(score, "name"), _require(score, "objective"))
        )


@dataclass
class SelectorContent:
    """Names of the entities matched by a selector."""

    TYPE: ClassVar[str] = "selector"
    selector: str
    separator: TextComponent

    def to_dict(self) -> dict:
        return {"selector": self.selector, "separator": self.separator.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> SelectorContent:
        return cls(
            _require(data, "selector"),
            TextComponent.from_dict(_require(data, "separator")),
        )


@dataclass
class KeybindContent:
    """The key bound to a control."""

    TYPE: ClassVar[str] = "keybind"
    keybind: str

    def to_dict(self) -> dict:
        return {"keybind": self.keybind}

    @classmethod
    def from_dict(cls, data: dict) -> KeybindContent:
        return cls(_require(data, "keybind"))


@dataclass
class NbtContent:
    """Values taken from NBT data."""

    TYPE: ClassVar[str] = "nbt"
    source: TextComponentNbtSource
    nbt: str
    interpret: bool
    separator: TextComponent
    block: str
    entity: str
    storage: str

    def to_dict(self) -> dict:
        return {
            "source": self.source.value,
            "nbt": self.nbt,
            "interpret": self.interpret,
            "separator": self.separator.to_dict(),
            "block": self.block,
            "entity": self.entity,
            "storage": self.storage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> NbtContent:
        return cls(
            _to_enum(TextComponentNbtSource, _require(data, "source")),
            _require(data, "nbt"),
            _require(data, "interpret"),
            TextComponent.from_dict(_require(data, "separator")),
            _require(data, "block"),
            _require(data, "entity"),
            _require(data, "storage"),
        )


TextComponentKind = Union[
    TextContent, TranslatableContent, ScoreContent, SelectorContent, KeybindContent, NbtContent
]

_CONTENT_TYPES: dict[str, Any] = {
    content.TYPE: content
    for content in (
        TextContent,
        TranslatableContent,
        ScoreContent,
        SelectorContent,
        KeybindContent,
        NbtContent,
    )
}


class ClickEventAction(enum.Enum):
    """What happens when a component is clicked."""

    OPEN_URL = "open_url"
    OPEN_FILE = "open_file"
    RUN_COMMAND = "run_command"
    SUGGEST_COMMAND = "suggest_command"
    CHANGE_PAGE = "change_page"
    COPY_TO_CLIPBOARD = "copy_to_clipboard"
    SHOW_DIALOG = "show_dialog"
    CUSTOM = "custom"


_CLICK_FIELDS = ("url", "path", "command", "page", "value", "id", "payload")


@dataclass
class ClickEvent:
    """A click action and its arguments."""

    action: ClickEventAction
    url: str | None = None
    path: str | None = None
    command: str | None = None
    page: int | None = None
    value: str | None = None
    id: str | None = None
    payload: str | None = None

    def to_dict(self) -> dict:
        return _put_present(
            {"action": self.action.value},
            **{name: getattr(self, name) for name in _CLICK_FIELDS},
        )

    @classmethod
    def from_dict(cls, data: dict) -> ClickEvent:
        action = _to_enum(ClickEventAction, _require(data, "action"))
        return cls(action, **{name: data.get(name) for name in _CLICK_FIELDS})


class HoverEventAction(enum.Enum):
    """What is shown when a component is hovered."""

    SHOW_TEXT = "show_text"
    SHOW_ITEM = "show_item"
    SHOW_ENTITY = "show_entity"


@dataclass
class HoverEvent:
    """A hover action and its arguments."""

    action: HoverEventAction
    value: TextComponent | None = None
    id: str | None = None
    count: int | None = None
    name: TextComponent | None = None
    uuid: str | None = None

    def to_dict(self) -> dict:
        return _put_present(
            {"action": self.action.value},
            value=self.value.to_dict() if self.value is not None else None,
            id=self.id,
            count=self.count,
            name=self.name.to_dict() if self.name is not None else None,
            uuid=self.uuid,
        )

    @classmethod
    def from_dict(cls, data: dict) -> HoverEvent:
        value = data.get("value") if isinstance(data, dict) else None
        name = data.get("name") if isinstance(data, dict) else None
        return cls(
            _to_enum(HoverEventAction, _require(data, "action")),
            value=TextComponent.from_dict(value) if value is not None else None,
            id=data.get("id"),
            count=data.get("count"),
            name=TextComponent.from_dict(name) if name is not None else None,
            uuid=data.get("uuid"),
        )


_STYLE_FIELDS = (
    "font",
    "bold",
    "italic",
    "underlined",
    "strikethrough",
    "obfuscated",
    "shadow_color",
    "insertion",
)


@dataclass
class TextComponent:
    """A piece of formatted chat text with optional children."""

    kind: TextComponentKind
    extra: list[TextComponent] | None = None
    color: Color | None = None
    font: str | None = None
    bold: bool | None = None
    italic: bool | None = None
    underlined: bool | None = None
    strikethrough: bool | None = None
    obfuscated: bool | None = None
    shadow_color: int | None = None
    insertion: str | None = None
    click_event: ClickEvent | None = None
    hover_event: HoverEvent | None = None

    def to_dict(self) -> dict:
        """Return the JSON object form; absent fields are left out."""
        result = {"type": self.kind.TYPE, **self.kind.to_dict()}
        return _put_present(
            result,
            extra=[child.to_dict() for child in self.extra] if self.extra is not None else None,
            color=_color_to_json(self.color) if self.color is not None else None,
            **{name: getattr(self, name) for name in _STYLE_FIELDS},
            click_event=self.click_event.to_dict() if self.click_event is not None else None,
            hover_event=self.hover_event.to_dict() if self.hover_event is not None else None,
        )

    @classmethod
    def from_dict(cls, data: dict) -> TextComponent:
        """Build a component from its JSON object form; raise ValueError if invalid."""
        type_name = _require(data, "type")
        content_cls = _CONTENT_TYPES.get(type_name)
        if content_cls is None:
            raise ValueError(f"unknown text component type {type_name!r}")

        extra = data.get("extra")
        color = data.get("color")
        click_event = data.get("click_event")
        hover_event = data.get("hover_event")
        return cls(
            content_cls.from_dict(data),
            extra=[cls.from_dict(child) for child in extra] if extra is not None else None,
            color=_color_from_json(color) if color is not None else None,
            **{name: data.get(name) for name in _STYLE_FIELDS},
            click_event=ClickEvent.from_dict(click_event) if click_event is not None else None,
            hover_event=HoverEvent.from_dict(hover_event) if hover_event is not None else None,
        )

    def to_json(self) -> str:
        """Return the compact JSON text of the component."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> TextComponent:
        """Parse a component from JSON text."""
        return cls.from_dict(json.loads(text))