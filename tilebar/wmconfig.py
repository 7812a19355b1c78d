"""Window manager configuration: appearance, tagging rules, commands and bindings."""

from __future__ import annotations

from dataclasses import dataclass, field

MODKEY = "Mod4"
MAX_TAGS = 31

# Every tag bit, used for "view all" and "tag all".
ALL_TAGS = ~0


@dataclass(frozen=True)
class Rule:
    """Match on window class, instance and title; assign tags, floating and monitor."""

    class_name: str | None = None
    instance: str | None = None
    title: str | None = None
    tags: int = 0
    is_floating: bool = False
    monitor: int = -1


def default_rules() -> tuple[Rule, ...]:
    """Return the default tagging rules."""
    return (
        Rule(class_name="Gimp", tags=0, is_floating=True, monitor=-1),
        Rule(class_name="Firefox", tags=1 << 8, is_floating=False, monitor=-1),
    )


_GRAY1 = "#222222"
_GRAY2 = "#444444"
_GRAY3 = "#bbbbbb"
_GRAY4 = "#eeeeee"
_CYAN = "#005577"
_FONT = "monospace:size=10"


def _default_commands() -> dict[str, tuple[str, ...]]:
    return {
        # "-m" is followed by the monitor number, filled in when spawned.
        "dmenu": (
            "dmenu_run", "-m", "0", "-fn", _FONT,
            "-nb", _GRAY1, "-nf", _GRAY3, "-sb", _CYAN, "-sf", _GRAY4,
        ),
        "term": ("st",),
        "brightness_up": ("brightnessctl", "set", "10%+"),
        "brightness_down": ("brightnessctl", "set", "10%-"),
        "volume_up": ("amixer", "set", "Master", "5%+"),
        "volume_down": ("amixer", "set", "Master", "5%-"),
        "volume_mute": ("amixer", "set", "Master", "0%"),
    }


def _default_keys(tag_count: int) -> tuple[tuple, ...]:
    mod = (MODKEY,)
    shift = (MODKEY, "Shift")
    keys = [
        (mod, "p", "spawn", "dmenu"),
        (shift, "Return", "spawn", "term"),
        (mod, "b", "togglebar", None),
        (mod, "j", "focusstack", 1),
        (mod, "k", "focusstack", -1),
        (mod, "i", "incnmaster", 1),
        (mod, "d", "incnmaster", -1),
        (mod, "h", "setmfact", -0.05),
        (mod, "l", "setmfact", 0.05),
        (mod, "Return", "zoom", None),
        (mod, "Tab", "view", None),
        (shift, "c", "killclient", None),
        (mod, "t", "setlayout", 0),
        (mod, "f", "setlayout", 1),
        (mod, "m", "setlayout", 2),
        (mod, "space", "setlayout", None),
        (shift, "space", "togglefloating", None),
        (mod, "0", "view", ALL_TAGS),
        (shift, "0", "tag", ALL_TAGS),
        (mod, "comma", "focusmon", -1),
        (mod, "period", "focusmon", 1),
        (shift, "comma", "tagmon", -1),
        (shift, "period", "tagmon", 1),
        (mod, "minus", "setgaps", -1),
        (mod, "equal", "setgaps", 1),
        (shift, "equal", "setgaps", 0),
        ((), "XF86MonBrightnessUp", "spawn", "brightness_up"),
        ((), "XF86MonBrightnessDown", "spawn", "brightness_down"),
        ((), "XF86AudioRaiseVolume", "spawn", "volume_up"),
        ((), "XF86AudioLowerVolume", "spawn", "volume_down"),
        ((), "XF86AudioMute", "spawn", "volume_mute"),
    ]
    for index in range(tag_count):
        keysym = str(index + 1)
        mask = 1 << index
        keys += [
            (mod, keysym, "view", mask),
            ((MODKEY, "Control"), keysym, "toggleview", mask),
            (shift, keysym, "tag", mask),
            ((MODKEY, "Control", "Shift"), keysym, "toggletag", mask),
        ]
    keys.append((shift, "q", "quit", None))
    return tuple(keys)


def _default_buttons() -> tuple[tuple, ...]:
    mod = (MODKEY,)
    return (
        ("layout_symbol", (), 1, "setlayout", None),
        ("layout_symbol", (), 3, "setlayout", 2),
        ("window_title", (), 2, "zoom", None),
        ("status_text", (), 2, "spawn", "term"),
        ("client_window", mod, 1, "movemouse", None),
        ("client_window", mod, 2, "togglefloating", None),
        ("client_window", mod, 3, "resizemouse", None),
        ("tag_bar", (), 1, "view", None),
        ("tag_bar", (), 3, "toggleview", None),
        ("tag_bar", mod, 1, "tag", None),
        ("tag_bar", mod, 3, "toggletag", None),
    )


_DEFAULT_TAGS = tuple(str(number) for number in range(1, 10))


@dataclass(frozen=True)
class Config:
    """All settings of the window manager.

    ``keys`` holds (modifiers, keysym, action, argument) and ``buttons`` holds
    (click area, modifiers, button, action, argument).  Layout arguments are
    indexes into the layout list; an argument of None means the action's default.
    """

    border_px: int = 2
    gap_px: int = 1
    snap: int = 32
    show_bar: bool = True
    top_bar: bool = True
    fonts: tuple[str, ...] = (_FONT,)
    dmenu_font: str = _FONT
    colors: dict[str, tuple[str, str, str]] = field(
        default_factory=lambda: {
            "norm": (_GRAY3, _GRAY1, _GRAY2),
            "sel": (_GRAY4, _CYAN, _CYAN),
        }
    )
    tags: tuple[str, ...] = _DEFAULT_TAGS
    rules: tuple[Rule, ...] = field(default_factory=default_rules)
    mfact: float = 0.55
    nmaster: int = 1
    resize_hints: bool = True
    lock_fullscreen: bool = True
    commands: dict[str, tuple[str, ...]] = field(default_factory=_default_commands)
    keys: tuple[tuple, ...] = field(default_factory=lambda: _default_keys(9))
    buttons: tuple[tuple, ...] = field(default_factory=_default_buttons)

    def __post_init__(self) -> None:
        if len(self.tags) > MAX_TAGS:
            raise ValueError(f"at most {MAX_TAGS} tags fit in the tag mask")
        if not 0.05 <= self.mfact <= 0.95:
            raise ValueError("mfact must lie within [0.05, 0.95]")


def default_config() -> Config:
    """Return the default configuration."""
    return Config()