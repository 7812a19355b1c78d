"""Window management state: clients, monitors, focus, tags and layouts."""

from __future__ import annotations

from typing import Iterable

from .layout import (
    Client,
    Layout,
    Monitor,
    Screen,
    create_monitor,
    default_layouts,
    dir_to_monitor,
    next_tiled,
    resize,
)
from .rules import apply_rules, tag_mask, update_size_hints
from .wmconfig import Config

# Longest layout symbol shown in the bar.
_SYMBOL_LIMIT = 15
# Name given to windows that report no title.
_BROKEN = "broken"


def _first_visible(clients: Iterable[Client]) -> Client | None:
    return next((c for c in clients if c.is_visible()), None)


class WindowManager:
    """Keeps clients on monitors and carries out the window manager's actions.

    Window handles are plain integers; nothing here talks to a display.
    """

    def __init__(
        self,
        config: Config,
        screen_width: int,
        screen_height: int,
        bar_height: int,
    ) -> None:
        self.config = config
        self.screen = Screen(
            width=screen_width,
            height=screen_height,
            bar_height=bar_height,
            resize_hints=config.resize_hints,
        )
        self.layouts: tuple[Layout, ...] = default_layouts()
        self.tag_mask = tag_mask(len(config.tags))
        monitor = create_monitor(config, self.layouts)
        monitor.mx = monitor.wx = 0
        monitor.my = monitor.wy = 0
        monitor.mw = monitor.ww = screen_width
        monitor.mh = monitor.wh = screen_height
        monitor.update_bar_pos(bar_height)
        self.monitors: list[Monitor] = [monitor]
        self.selmon: Monitor = monitor
        self.running = True

    # -- lookup and list handling ---------------------------------------

    def _client_for(self, window: int | None) -> Client | None:
        if window is None:
            return None
        for monitor in self.monitors:
            for client in monitor.clients:
                if client.window == window:
                    return client
        return None

    @staticmethod
    def _attach(client: Client) -> None:
        client.monitor.clients.insert(0, client)

    @staticmethod
    def _attach_stack(client: Client) -> None:
        client.monitor.stack.insert(0, client)

    @staticmethod
    def _detach(client: Client) -> None:
        clients = client.monitor.clients
        if client in clients:
            clients.remove(client)

    @staticmethod
    def _detach_stack(client: Client) -> None:
        monitor = client.monitor
        if client in monitor.stack:
            monitor.stack.remove(client)
        if client is monitor.sel:
            monitor.sel = _first_visible(monitor.stack)

    def _unfocus(self, client: Client | None) -> None:
        # Only the display-side effects of losing focus exist in the source;
        # there is no state to change here.
        return None

    # -- core operations --------------------------------------------------

    def manage(
        self,
        window: int,
        x: int,
        y: int,
        w: int,
        h: int,
        class_name: str | None = None,
        instance: str | None = None,
        title: str = "",
        transient_for: int | None = None,
    ) -> Client:
        """Start managing a window and return its client."""
        if self._client_for(window) is not None:
            raise ValueError(f"window {window} is already managed")

        client = Client(
            window=window,
            name=title or _BROKEN,
            x=x, y=y, w=w, h=h,
            old_x=x, old_y=y, old_w=w, old_h=h,
        )
        parent = self._client_for(transient_for)
        if parent is not None:
            client.monitor = parent.monitor
            client.tags = parent.tags
        else:
            client.monitor = self.selmon
            apply_rules(
                self.config.rules,
                client,
                class_name,
                instance,
                self.monitors,
                len(self.config.tags),
            )

        monitor = client.monitor
        if client.x + client.width > monitor.wx + monitor.ww:
            client.x = monitor.wx + monitor.ww - client.width
        if client.y + client.height > monitor.wy + monitor.wh:
            client.y = monitor.wy + monitor.wh - client.height
        client.x = max(client.x, monitor.wx)
        client.y = max(client.y, monitor.wy)
        client.bw = self.config.border_px

        update_size_hints(client, None)
        if not client.is_floating:
            floating = transient_for is not None or client.is_fixed
            client.is_floating = client.old_state = floating
        self._attach(client)
        self._attach_stack(client)
        if monitor is self.selmon:
            self._unfocus(self.selmon.sel)
        monitor.sel = client
        self.arrange(monitor)
        self.focus(None)
        return client

    def unmanage(self, client: Client) -> None:
        """Stop managing a client."""
        monitor = client.monitor
        if monitor is None or client not in monitor.clients:
            raise ValueError("client is not managed")
        self._detach(client)
        self._detach_stack(client)
        self.focus(None)
        self.arrange(monitor)

    def focus(self, client: Client | None) -> None:
        """Give focus to a client, or to the first visible one in the stack."""
        if client is None or not client.is_visible():
            client = _first_visible(self.selmon.stack)
        if self.selmon.sel is not None and self.selmon.sel is not client:
            self._unfocus(self.selmon.sel)
        if client is not None:
            if client.monitor is not self.selmon:
                self.selmon = client.monitor
            if client.is_urgent:
                client.is_urgent = False
            self._detach_stack(client)
            self._attach_stack(client)
        self.selmon.sel = client

    def _show_hide(self, monitor: Monitor) -> None:
        for client in monitor.stack:
            if not client.is_visible():
                continue
            floating_layout = monitor.layout.arrange is None
            if (floating_layout or client.is_floating) and not client.is_fullscreen:
                resize(self.screen, client, client.x, client.y, client.w, client.h, False)

    def _arrange_monitor(self, monitor: Monitor) -> None:
        monitor.ltsymbol = monitor.layout.symbol[:_SYMBOL_LIMIT]
        if monitor.layout.arrange is not None:
            monitor.layout.arrange(self.screen, monitor)

    def arrange(self, monitor: Monitor | None = None) -> None:
        """Lay out one monitor, or all of them when ``monitor`` is None."""
        targets = [monitor] if monitor is not None else list(self.monitors)
        for target in targets:
            self._show_hide(target)
        for target in targets:
            self._arrange_monitor(target)

    # -- tags ---------------------------------------------------------------

    def view(self, mask: int | None) -> None:
        """View the tags in ``mask``; 0 or None returns to the previous view."""
        mask = (mask or 0) & self.tag_mask
        monitor = self.selmon
        if mask == monitor.tags:
            return
        monitor.seltags ^= 1
        if mask:
            monitor.tagset[monitor.seltags] = mask
        self.focus(None)
        self.arrange(monitor)

    def toggle_view(self, mask: int) -> None:
        """Add or remove tags from the current view, never leaving it empty."""
        monitor = self.selmon
        new_tags = monitor.tags ^ (mask & self.tag_mask)
        if new_tags:
            monitor.tagset[monitor.seltags] = new_tags
            self.focus(None)
            self.arrange(monitor)

    def tag(self, mask: int) -> None:
        """Set the tags of the selected client."""
        sel = self.selmon.sel
        if sel is not None and mask & self.tag_mask:
            sel.tags = mask & self.tag_mask
            self.focus(None)
            self.arrange(self.selmon)

    def toggle_tag(self, mask: int) -> None:
        """Add or remove tags of the selected client, never leaving it untagged."""
        sel = self.selmon.sel
        if sel is None:
            return
        new_tags = sel.tags ^ (mask & self.tag_mask)
        if new_tags:
            sel.tags = new_tags
            self.focus(None)
            self.arrange(self.selmon)

    # -- focus and layout actions --------------------------------------------

    def focus_stack(self, direction: int) -> None:
        """Focus the next (direction > 0) or previous visible client."""
        monitor = self.selmon
        sel = monitor.sel
        if sel is None or (sel.is_fullscreen and self.config.lock_fullscreen):
            return
        clients = monitor.clients
        index = clients.index(sel)
        if direction > 0:
            target = _first_visible(clients[index + 1:]) or _first_visible(clients)
        else:
            before = [c for c in clients[:index] if c.is_visible()]
            if before:
                target = before[-1]
            else:
                after = [c for c in clients[index:] if c.is_visible()]
                target = after[-1] if after else None
        if target is not None:
            self.focus(target)

    def inc_nmaster(self, delta: int) -> None:
        """Change the number of master clients, not below zero."""
        self.selmon.nmaster = max(self.selmon.nmaster + delta, 0)
        self.arrange(self.selmon)

    def set_mfact(self, delta: float) -> None:
        """Change the master area factor; a value above 1.0 sets it absolutely."""
        monitor = self.selmon
        if delta is None or monitor.layout.arrange is None:
            return
        factor = delta + monitor.mfact if delta < 1.0 else delta - 1.0
        if factor < 0.05 or factor > 0.95:
            return
        monitor.mfact = factor
        self.arrange(monitor)

    def set_gaps(self, delta: int) -> None:
        """Change the gap between windows; 0 resets it."""
        monitor = self.selmon
        if delta == 0 or monitor.gappx + delta < 0:
            monitor.gappx = 0
        else:
            monitor.gappx += delta
        self.arrange(monitor)

    def set_layout(self, layout: Layout | int | None) -> None:
        """Switch to a layout, given itself or by index; None swaps to the last one."""
        if isinstance(layout, int):
            layout = self.layouts[layout]
        monitor = self.selmon
        if layout is None or layout is not monitor.layout:
            monitor.sellt ^= 1
        if layout is not None:
            monitor.lt[monitor.sellt] = layout
        monitor.ltsymbol = monitor.layout.symbol[:_SYMBOL_LIMIT]
        if monitor.sel is not None:
            self.arrange(monitor)

    def toggle_bar(self) -> None:
        """Show or hide the bar of the selected monitor."""
        monitor = self.selmon
        monitor.showbar = not monitor.showbar
        monitor.update_bar_pos(self.screen.bar_height)
        self.arrange(monitor)

    def toggle_floating(self) -> None:
        """Toggle floating of the selected client; fixed-size clients stay floating."""
        sel = self.selmon.sel
        if sel is None or sel.is_fullscreen:
            return
        sel.is_floating = not sel.is_floating or sel.is_fixed
        if sel.is_floating:
            resize(self.screen, sel, sel.x, sel.y, sel.w, sel.h, False)
        self.arrange(self.selmon)

    def zoom(self) -> None:
        """Move the selected tiled client to the master area, or swap with the next."""
        monitor = self.selmon
        client = monitor.sel
        if monitor.layout.arrange is None or client is None or client.is_floating:
            return
        if client is next_tiled(monitor.clients):
            index = monitor.clients.index(client)
            client = next_tiled(monitor.clients[index + 1:])
            if client is None:
                return
        self._detach(client)
        self._attach(client)
        self.focus(client)
        self.arrange(client.monitor)

    # -- monitors ---------------------------------------------------------------

    def focus_monitor(self, direction: int) -> None:
        """Select the next or previous monitor."""
        if len(self.monitors) < 2:
            return
        target = dir_to_monitor(self.monitors, self.selmon, direction)
        if target is self.selmon:
            return
        self._unfocus(self.selmon.sel)
        self.selmon = target
        self.focus(None)

    def _send_to_monitor(self, client: Client, monitor: Monitor) -> None:
        if client.monitor is monitor:
            return
        self._unfocus(client)
        self._detach(client)
        self._detach_stack(client)
        client.monitor = monitor
        client.tags = monitor.tags
        self._attach(client)
        self._attach_stack(client)
        self.focus(None)
        self.arrange(None)

    def tag_monitor(self, direction: int) -> None:
        """Send the selected client to the next or previous monitor."""
        sel = self.selmon.sel
        if sel is None or len(self.monitors) < 2:
            return
        self._send_to_monitor(sel, dir_to_monitor(self.monitors, self.selmon, direction))

    def set_fullscreen(self, client: Client, fullscreen: bool) -> None:
        """Make a client cover its whole monitor, or restore it."""
        monitor = client.monitor
        if fullscreen and not client.is_fullscreen:
            client.is_fullscreen = True
            client.old_state = client.is_floating
            client.old_bw = client.bw
            client.bw = 0
            client.is_floating = True
            client.set_geometry(monitor.mx, monitor.my, monitor.mw, monitor.mh)
        elif not fullscreen and client.is_fullscreen:
            client.is_fullscreen = False
            client.is_floating = client.old_state
            client.bw = client.old_bw
            client.x, client.y = client.old_x, client.old_y
            client.w, client.h = client.old_w, client.old_h
            client.set_geometry(client.x, client.y, client.w, client.h)
            self.arrange(monitor)

    def quit(self) -> None:
        """Ask the event loop to stop."""
        self.running = False