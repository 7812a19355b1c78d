"""Tagging rules and ICCCM size hints applied to managed clients."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from .layout import Client, Monitor
from .wmconfig import MAX_TAGS, Rule

# Name used when a window reports no class or instance.
BROKEN = "broken"

Size = tuple[int, int]


@dataclass(frozen=True)
class SizeHints:
    """A window's normal hints; a field of None means the hint is absent.

    ``aspect`` holds the minimum and maximum aspect ratios, each as (x, y).
    """

    base_size: Size | None = None
    min_size: Size | None = None
    max_size: Size | None = None
    resize_inc: Size | None = None
    aspect: tuple[Size, Size] | None = None


def tag_mask(tag_count: int) -> int:
    """Return the bit mask that covers ``tag_count`` tags."""
    if not 0 <= tag_count <= MAX_TAGS:
        raise ValueError(f"tag count must lie within [0, {MAX_TAGS}]")
    return (1 << tag_count) - 1


def _matches(rule: Rule, title: str, class_name: str, instance: str) -> bool:
    return (
        (not rule.title or rule.title in title)
        and (not rule.class_name or rule.class_name in class_name)
        and (not rule.instance or rule.instance in instance)
    )


def apply_rules(
    rules: Iterable[Rule],
    client: Client,
    class_name: str | None,
    instance: str | None,
    monitors: Sequence[Monitor],
    tag_count: int,
) -> None:
    """Set the client's floating state, tags and monitor from matching rules.

    Every matching rule adds its tags; the last one decides floating and, if
    its monitor number exists, the monitor.  Without valid tags the client
    takes the tags its monitor currently views.
    """
    class_name = class_name or BROKEN
    instance = instance or BROKEN
    client.is_floating = False
    tags = 0
    for rule in rules:
        if not _matches(rule, client.name, class_name, instance):
            continue
        client.is_floating = rule.is_floating
        tags |= rule.tags
        target = next((m for m in monitors if m.num == rule.monitor), None)
        if target is not None:
            client.monitor = target

    if client.monitor is None:
        raise ValueError("client has no monitor")
    masked = tags & tag_mask(tag_count)
    client.tags = masked if masked else client.monitor.tags


def _ratio(numerator: int, denominator: int) -> float:
    if denominator:
        return numerator / denominator
    if numerator:
        return math.copysign(math.inf, numerator)
    return math.nan


def update_size_hints(client: Client, hints: SizeHints | None) -> None:
    """Copy normal hints into the client; None means the window has none."""
    hints = hints or SizeHints()

    if hints.base_size is not None:
        client.base_w, client.base_h = hints.base_size
    elif hints.min_size is not None:
        client.base_w, client.base_h = hints.min_size
    else:
        client.base_w = client.base_h = 0

    if hints.resize_inc is not None:
        client.inc_w, client.inc_h = hints.resize_inc
    else:
        client.inc_w = client.inc_h = 0

    if hints.max_size is not None:
        client.max_w, client.max_h = hints.max_size
    else:
        client.max_w = client.max_h = 0

    if hints.min_size is not None:
        client.min_w, client.min_h = hints.min_size
    elif hints.base_size is not None:
        client.min_w, client.min_h = hints.base_size
    else:
        client.min_w = client.min_h = 0

    if hints.aspect is not None:
        (min_x, min_y), (max_x, max_y) = hints.aspect
        client.min_aspect = _ratio(min_y, min_x)
        client.max_aspect = _ratio(max_x, max_y)
    else:
        client.min_aspect = client.max_aspect = 0.0

    client.is_fixed = bool(
        client.max_w
        and client.max_h
        and client.max_w == client.min_w
        and client.max_h == client.min_h
    )
    client.hints_valid = True