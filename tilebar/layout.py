"""Client and monitor geometry: size hints, tiling and monocle layouts."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterable, NamedTuple, Sequence

from .wmconfig import Config

# Longest layout symbol shown in the bar.
_SYMBOL_LIMIT = 15


class Geometry(NamedTuple):
    """A window rectangle without its border."""

    x: int
    y: int
    w: int
    h: int


@dataclass
class Screen:
    """The whole display: its size, the bar height and the size-hint policy."""

    width: int
    height: int
    bar_height: int
    resize_hints: bool = True


@dataclass(frozen=True)
class Layout:
    """A bar symbol and the function that arranges a monitor, or None to float."""

    symbol: str
    arrange: Callable[[Screen, "Monitor"], None] | None = None


@dataclass(eq=False)
class Client:
    """A managed window with its geometry, size hints and state."""

    window: int = 0
    name: str = ""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    old_x: int = 0
    old_y: int = 0
    old_w: int = 0
    old_h: int = 0
    base_w: int = 0
    base_h: int = 0
    inc_w: int = 0
    inc_h: int = 0
    max_w: int = 0
    max_h: int = 0
    min_w: int = 0
    min_h: int = 0
    hints_valid: bool = False
    min_aspect: float = 0.0
    max_aspect: float = 0.0
    bw: int = 0
    old_bw: int = 0
    tags: int = 0
    is_fixed: bool = False
    is_floating: bool = False
    is_urgent: bool = False
    never_focus: bool = False
    old_state: bool = False
    is_fullscreen: bool = False
    monitor: "Monitor | None" = None

    @property
    def width(self) -> int:
        """Width including both borders."""
        return self.w + 2 * self.bw

    @property
    def height(self) -> int:
        """Height including both borders."""
        return self.h + 2 * self.bw

    def is_visible(self) -> bool:
        """Return True if the client shares a tag with its monitor's current view."""
        if self.monitor is None:
            return False
        return bool(self.tags & self.monitor.tags)

    def set_geometry(self, x: int, y: int, w: int, h: int) -> None:
        """Move and resize, remembering the previous geometry."""
        self.old_x, self.x = self.x, x
        self.old_y, self.y = self.y, y
        self.old_w, self.w = self.w, w
        self.old_h, self.h = self.h, h


def _default_pair() -> list[Layout]:
    layouts = default_layouts()
    return [layouts[0], layouts[1 % len(layouts)]]


@dataclass(eq=False)
class Monitor:
    """One physical screen area with its clients, focus stack and view."""

    num: int = 0
    ltsymbol: str = ""
    mfact: float = 0.55
    nmaster: int = 1
    by: int = 0
    mx: int = 0
    my: int = 0
    mw: int = 0
    mh: int = 0
    wx: int = 0
    wy: int = 0
    ww: int = 0
    wh: int = 0
    gappx: int = 0
    seltags: int = 0
    sellt: int = 0
    tagset: list[int] = field(default_factory=lambda: [1, 1])
    showbar: bool = True
    topbar: bool = True
    clients: list[Client] = field(default_factory=list)
    sel: Client | None = None
    stack: list[Client] = field(default_factory=list)
    barwin: int = 0
    lt: list[Layout] = field(default_factory=_default_pair)

    @property
    def layout(self) -> Layout:
        """The layout currently in use."""
        return self.lt[self.sellt]

    @property
    def tags(self) -> int:
        """The tag set currently viewed."""
        return self.tagset[self.seltags]

    def update_bar_pos(self, bar_height: int) -> None:
        """Recompute the window area and the bar position."""
        self.wy = self.my
        self.wh = self.mh
        if self.showbar:
            self.wh -= bar_height
            self.by = self.wy if self.topbar else self.wy + self.wh
            self.wy = self.wy + bar_height if self.topbar else self.wy
        else:
            self.by = -bar_height


def create_monitor(config: Config, layouts: Sequence[Layout]) -> Monitor:
    """Return a new monitor set up from the configuration."""
    if not layouts:
        raise ValueError("at least one layout is required")
    return Monitor(
        mfact=config.mfact,
        nmaster=config.nmaster,
        showbar=config.show_bar,
        topbar=config.top_bar,
        gappx=config.gap_px,
        lt=[layouts[0], layouts[1 % len(layouts)]],
        ltsymbol=layouts[0].symbol[:_SYMBOL_LIMIT],
    )


def _c_mod(value: int, divisor: int) -> int:
    return int(math.fmod(value, divisor))


def _fdiv(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator:
        return math.copysign(math.inf, numerator)
    return math.nan


def apply_size_hints(
    screen: Screen,
    client: Client,
    x: int,
    y: int,
    w: int,
    h: int,
    interact: bool,
) -> tuple[Geometry, bool]:
    """Constrain a requested geometry; return it and whether it differs from now.

    The client's size-hint fields are used as they stand.
    """
    monitor = client.monitor
    if monitor is None:
        raise ValueError("client has no monitor")

    w = max(1, w)
    h = max(1, h)
    border = 2 * client.bw
    if interact:
        if x > screen.width:
            x = screen.width - client.width
        if y > screen.height:
            y = screen.height - client.height
        if x + w + border < 0:
            x = 0
        if y + h + border < 0:
            y = 0
    else:
        if x >= monitor.wx + monitor.ww:
            x = monitor.wx + monitor.ww - client.width
        if y >= monitor.wy + monitor.wh:
            y = monitor.wy + monitor.wh - client.height
        if x + w + border <= monitor.wx:
            x = monitor.wx
        if y + h + border <= monitor.wy:
            y = monitor.wy
    h = max(h, screen.bar_height)
    w = max(w, screen.bar_height)

    if screen.resize_hints or client.is_floating or monitor.layout.arrange is None:
        # ICCCM 4.1.2.3: base size counts as minimum when only one is given
        base_is_min = client.base_w == client.min_w and client.base_h == client.min_h
        if not base_is_min:
            w -= client.base_w
            h -= client.base_h
        if client.min_aspect > 0 and client.max_aspect > 0:
            if client.max_aspect < _fdiv(w, h):
                w = int(h * client.max_aspect + 0.5)
            elif client.min_aspect < _fdiv(h, w):
                h = int(w * client.min_aspect + 0.5)
        if base_is_min:
            w -= client.base_w
            h -= client.base_h
        if client.inc_w:
            w -= _c_mod(w, client.inc_w)
        if client.inc_h:
            h -= _c_mod(h, client.inc_h)
        w = max(w + client.base_w, client.min_w)
        h = max(h + client.base_h, client.min_h)
        if client.max_w:
            w = min(w, client.max_w)
        if client.max_h:
            h = min(h, client.max_h)

    geometry = Geometry(x, y, w, h)
    changed = geometry != (client.x, client.y, client.w, client.h)
    return geometry, changed


def resize(
    screen: Screen,
    client: Client,
    x: int,
    y: int,
    w: int,
    h: int,
    interact: bool,
) -> bool:
    """Apply size hints and move the client if that changes it; return whether it did."""
    geometry, changed = apply_size_hints(screen, client, x, y, w, h, interact)
    if changed:
        client.set_geometry(*geometry)
    return changed


def next_tiled(clients: Iterable[Client]) -> Client | None:
    """Return the first visible, non-floating client, or None."""
    for client in clients:
        if not client.is_floating and client.is_visible():
            return client
    return None


def _tiled(monitor: Monitor) -> list[Client]:
    return [c for c in monitor.clients if not c.is_floating and c.is_visible()]


def tile(screen: Screen, monitor: Monitor) -> None:
    """Arrange tiled clients in a master column and a stack column."""
    clients = _tiled(monitor)
    n = len(clients)
    if n == 0:
        return

    gap = monitor.gappx
    if n > monitor.nmaster:
        master_w = int(monitor.ww * monitor.mfact) if monitor.nmaster else 0
    else:
        master_w = monitor.ww - gap

    my = ty = gap
    for i, client in enumerate(clients):
        if i < monitor.nmaster:
            h = (monitor.wh - my) // (min(n, monitor.nmaster) - i) - gap
            resize(
                screen,
                client,
                monitor.wx + gap,
                monitor.wy + my,
                master_w - 2 * client.bw - gap,
                h - 2 * client.bw,
                False,
            )
            if my + client.height + gap < monitor.wh:
                my += client.height + gap
        else:
            h = (monitor.wh - ty) // (n - i) - gap
            resize(
                screen,
                client,
                monitor.wx + master_w + gap,
                monitor.wy + ty,
                monitor.ww - master_w - 2 * client.bw - 2 * gap,
                h - 2 * client.bw,
                False,
            )
            if ty + client.height + gap < monitor.wh:
                ty += client.height + gap


def monocle(screen: Screen, monitor: Monitor) -> None:
    """Give every tiled client the whole window area; show the visible count."""
    visible = sum(1 for c in monitor.clients if c.is_visible())
    if visible > 0:
        monitor.ltsymbol = f"[{visible}]"[:_SYMBOL_LIMIT]
    for client in _tiled(monitor):
        resize(
            screen,
            client,
            monitor.wx,
            monitor.wy,
            monitor.ww - 2 * client.bw,
            monitor.wh - 2 * client.bw,
            False,
        )


def default_layouts() -> tuple[Layout, ...]:
    """Return the tiled, floating and monocle layouts; the first is the default."""
    return (
        Layout("[]=", tile),
        Layout("><>", None),
        Layout("[M]", monocle),
    )


def intersect(x: int, y: int, w: int, h: int, monitor: Monitor) -> int:
    """Return the area a rectangle shares with a monitor's window area."""
    across = max(0, min(x + w, monitor.wx + monitor.ww) - max(x, monitor.wx))
    down = max(0, min(y + h, monitor.wy + monitor.wh) - max(y, monitor.wy))
    return across * down


def rect_to_monitor(
    monitors: Sequence[Monitor],
    selected: Monitor,
    x: int,
    y: int,
    w: int,
    h: int,
) -> Monitor:
    """Return the monitor that holds most of a rectangle, else ``selected``."""
    best = selected
    area = 0
    for monitor in monitors:
        overlap = intersect(x, y, w, h, monitor)
        if overlap > area:
            area = overlap
            best = monitor
    return best


def dir_to_monitor(
    monitors: Sequence[Monitor], selected: Monitor, direction: int
) -> Monitor:
    """Return the next (direction > 0) or previous monitor, wrapping around."""
    index = next(i for i, m in enumerate(monitors) if m is selected)
    if direction > 0:
        return monitors[(index + 1) % len(monitors)]
    return monitors[index - 1]