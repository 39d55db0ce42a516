import json

import pytest

from kasumi.text import (
    ClickEvent,
    ClickEventAction,
    HoverEvent,
    HoverEventAction,
    KeybindContent,
    NamedColor,
    NbtContent,
    ScoreContent,
    SelectorContent,
    TextComponent,
    TextComponentNbtSource,
    TextComponentScoreboard,
    TextContent,
    TranslatableContent,
)


def _sample_component():
    return TextComponent(
        kind=TextContent("Hello, World!"),
        extra=[
            TextComponent(
                kind=TextContent("This is Kasumi"),
                color=NamedColor.GOLD,
                italic=True,
                underlined=True,
            )
        ],
        color=NamedColor.DARK_GREEN,
        bold=True,
    )


def test_component():
    component = _sample_component()
    assert component.to_dict() == {
        "type": "text",
        "text": "Hello, World!",
        "extra": [
            {
                "type": "text",
                "text": "This is Kasumi",
                "color": "gold",
                "italic": True,
                "underlined": True,
            }
        ],
        "color": "dark_green",
        "bold": True,
    }


def test_component_json_order_and_round_trip():
    component = _sample_component()
    text = component.to_json()
    assert text.startswith('{"type":"text","text":"Hello, World!","extra":')
    assert TextComponent.from_json(text) == component


def test_hex_color_stays_string():
    component = TextComponent(kind=TextContent("x"), color="#ff00ff")
    decoded = TextComponent.from_dict(component.to_dict())
    assert decoded.color == "#ff00ff"


def test_named_color_decoded_as_enum():
    decoded = TextComponent.from_dict({"type": "text", "text": "x", "color": "light_purple"})
    assert decoded.color is NamedColor.LIGHT_PURPLE


@pytest.mark.parametrize(
    "kind",
    [
        TranslatableContent("chat.type.text", "fallback", [TextComponent(TextContent("a"))]),
        ScoreContent(TextComponentScoreboard("player", "kills")),
        SelectorContent("@a", TextComponent(TextContent(", "))),
        KeybindContent("key.jump"),
        NbtContent(
            TextComponentNbtSource.ENTITY,
            "Health",
            False,
            TextComponent(TextContent(";")),
            "",
            "@s",
            "",
        ),
    ],
)
def test_kinds_round_trip(kind):
    component = TextComponent(kind=kind)
    assert TextComponent.from_json(component.to_json()) == component


def test_type_tags():
    assert TextComponent(ScoreContent(TextComponentScoreboard("a", "b"))).to_dict()["type"] == "score"
    assert TextComponent(KeybindContent("key.jump")).to_dict()["type"] == "keybind"
    translated = TextComponent(TranslatableContent("k", "f", [])).to_dict()
    assert translated["with"] == []


def test_events_round_trip():
    component = TextComponent(
        kind=TextContent("click"),
        click_event=ClickEvent(ClickEventAction.OPEN_URL, url="https://example.com"),
        hover_event=HoverEvent(HoverEventAction.SHOW_TEXT, value=TextComponent(TextContent("tip"))),
    )
    data = component.to_dict()
    assert data["click_event"] == {"action": "open_url", "url": "https://example.com"}
    assert data["hover_event"] == {"action": "show_text", "value": {"type": "text", "text": "tip"}}
    assert TextComponent.from_dict(json.loads(component.to_json())) == component


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        TextComponent.from_dict({"type": "bogus"})


def test_missing_field_raises():
    with pytest.raises(ValueError):
        TextComponent.from_dict({"type": "text"})


def test_unknown_click_action_raises():
    with pytest.raises(ValueError):
        TextComponent.from_dict({"type": "text", "text": "x", "click_event": {"action": "jump"}})