"""Roster table, header bar and event log."""
from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

import pygame

from tick_aging import MortalityRecord
from tick_aging.views import birth_label, death_label, warning_level
from ui.constants import (
    COLOR_FROZEN,
    COLOR_HEADER_BG,
    COLOR_LOG_BG,
    COLOR_ROW_ALT,
    COLOR_ROW_SELECTED,
    COLOR_TEXT,
    COLOR_TEXT_DIM,
    COLUMNS,
    HEADER_H,
    LOG_COLORS,
    ROW_H,
    WARNING_COLORS,
)

if TYPE_CHECKING:
    from game.host import HostState


def _flags(record: MortalityRecord, frozen: bool) -> str:
    flags = []
    if frozen:
        flags.append("FROZEN")
    if record.blessed:
        flags.append("blessed")
    if record.immortal:
        flags.append("immortal")
    if warning_level(record) is not None:
        flags.append(f"{record.years_left}y left")
    return " ".join(flags)


def draw_header(
    surface: pygame.Surface,
    font: pygame.font.Font,
    lines: list[str],
) -> None:
    w = surface.get_width()
    pygame.draw.rect(surface, COLOR_HEADER_BG, (0, 0, w, HEADER_H))
    y = 6
    for line in lines:
        surface.blit(font.render(line, True, COLOR_TEXT), (8, y))
        y += 16
    pygame.draw.line(surface, (50, 50, 60), (0, HEADER_H - 1), (w, HEADER_H - 1))


def draw_table(
    surface: pygame.Surface,
    font: pygame.font.Font,
    state: HostState,
    rows: list[tuple[str, MortalityRecord]],
    selected: int,
    top: int,
    height: int,
) -> None:
    """Draw one line per record, scrolled so *selected* stays visible."""
    x = 8
    for title, width in COLUMNS:
        surface.blit(font.render(title, True, COLOR_TEXT_DIM), (x, top + 2))
        x += width

    visible = max(1, height // ROW_H - 1)
    first = max(0, selected - visible + 1)
    y = top + ROW_H
    for index, (name, record) in enumerate(rows[first:first + visible], start=first):
        if index == selected:
            pygame.draw.rect(surface, COLOR_ROW_SELECTED, (0, y, surface.get_width(), ROW_H))
        elif index % 2:
            pygame.draw.rect(surface, COLOR_ROW_ALT, (0, y, surface.get_width(), ROW_H))

        frozen = name in state.freezer
        member = state.roster.get(name)
        color = COLOR_FROZEN if frozen else WARNING_COLORS.get(warning_level(record) or "", COLOR_TEXT)
        cells = [
            name,
            member.trait if member is not None else "?",
            str(record.current_age),
            "-" if record.immortal else str(record.death_age),
            birth_label(record),
            death_label(record),
            _flags(record, frozen),
        ]
        x = 8
        for text, (_, width) in zip(cells, COLUMNS):
            surface.blit(font.render(text, True, color), (x, y + 3))
            x += width
        y += ROW_H


class EventLog:
    """Most recent host and engine events, newest at the bottom."""

    def __init__(self, max_entries: int = 50) -> None:
        self.entries: deque[tuple[str, tuple[int, int, int]]] = deque(maxlen=max_entries)

    def extend(self, events: list[tuple[str, str]]) -> None:
        for text, category in events:
            self.entries.append((text, LOG_COLORS.get(category, LOG_COLORS["default"])))
        events.clear()

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, y: int, h: int) -> None:
        w = surface.get_width()
        pygame.draw.rect(surface, COLOR_LOG_BG, (0, y, w, h))
        pygame.draw.line(surface, (50, 50, 60), (0, y), (w, y))
        line_h = 14
        ty = y + 4
        for text, color in list(self.entries)[-max(1, (h - 8) // line_h):]:
            surface.blit(font.render(text, True, color), (8, ty))
            ty += line_h
