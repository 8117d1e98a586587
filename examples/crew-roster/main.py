"""Crew-Roster - Aging and mortality on a simulated space program.

A lightly interactive roster view. The host clock runs under time warp
while crew go on missions, get frozen, have accidents and grow old.

Controls:
  Space       Pause / Resume
  1-5         Time warp (1 day/s .. 10 years/s)
  Tab         Toggle alive / deceased
  S           Cycle sort order
  V           Cycle view (all / frozen / by trait)
  Up/Down     Select crew member
  B           Toggle blessing on selected
  I           Toggle immortality on selected
  L           Lock settings (one way)
  F5 / F9     Save / Load aging data
  Escape      Quit
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pygame

from game.host import TRAITS, HostState, advance, build_host, load, save
from tick_aging import YEAR_SECONDS, calendar_year
from tick_aging.views import SortMode, alive_filter, all_of, frozen_filter, sort_key, trait_filter
from ui.constants import COLOR_BG, FPS, HEADER_H, LOG_H, SCREEN_H, SCREEN_W, WARP_RATES
from ui.roster_table import EventLog, draw_header, draw_table

VIEWS = ["All", "Frozen"] + TRAITS


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Crew-Roster - tick-aging visual demo")
    p.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    p.add_argument("--crew", type=int, default=10, help="Starting crew (2-14, default: 10)")
    p.add_argument("--start-year", type=int, default=1, help="Calendar year to start in (default: 1)")
    p.add_argument("--save", type=Path, default=Path("crew-roster-save.json"),
                   metavar="FILE", help="Save file for F5/F9")
    p.add_argument("-v", "--verbose", action="store_true", help="Log engine activity to stderr")
    args = p.parse_args()
    args.crew = max(2, min(14, args.crew))
    args.start_year = max(1, args.start_year)
    return args


def _rows(state: HostState, show_alive: bool, sort: SortMode, view: str):
    predicates = [alive_filter(show_alive)]
    if view == "Frozen":
        predicates.append(frozen_filter(state.freezer))
    elif view != "All":
        predicates.append(trait_filter(state.roster, view))
    key, reverse = sort_key(sort)
    return state.engine.records(where=all_of(*predicates), order_by=key, reverse=reverse)


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    # A minute past the start of the year; a zero clock is not yet valid.
    state = build_host(args.seed, args.crew, (args.start_year - 1) * YEAR_SECONDS + 60.0)
    state.engine.on_tick()
    log = EventLog()

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Crew-Roster - tick-aging demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 13)
    small_font = pygame.font.SysFont("monospace", 11)

    paused = False
    warp = 0
    show_alive = True
    sort = SortMode.OLDEST_FIRST
    view = 0
    selected = 0
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0
        rows = _rows(state, show_alive, sort, VIEWS[view])

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type != pygame.KEYDOWN:
                continue
            elif event.key == pygame.K_ESCAPE:
                running = False
            elif event.key == pygame.K_SPACE:
                paused = not paused
            elif pygame.K_1 <= event.key < pygame.K_1 + len(WARP_RATES):
                warp = event.key - pygame.K_1
            elif event.key == pygame.K_TAB:
                show_alive = not show_alive
                selected = 0
            elif event.key == pygame.K_s:
                sort = sort.next()
            elif event.key == pygame.K_v:
                view = (view + 1) % len(VIEWS)
                selected = 0
            elif event.key == pygame.K_UP:
                selected = max(0, selected - 1)
            elif event.key == pygame.K_DOWN:
                selected = min(max(0, len(rows) - 1), selected + 1)
            elif event.key in (pygame.K_b, pygame.K_i) and rows:
                name, record = rows[min(selected, len(rows) - 1)]
                if event.key == pygame.K_b:
                    state.engine.overrides.set_blessed(name, not record.blessed)
                else:
                    state.engine.overrides.set_immortal(name, not record.immortal)
            elif event.key == pygame.K_l:
                state.engine.overrides.lock()
            elif event.key == pygame.K_F5:
                save(state, args.save)
                state.events.append((f"Saved to {args.save}", "save"))
            elif event.key == pygame.K_F9:
                if load(state, args.save):
                    state.events.append((f"Loaded {args.save}", "save"))

        # --- Advance host clock ---
        if not paused:
            advance(state, WARP_RATES[warp][1] * dt)
        log.extend(state.events)

        # --- Render ---
        rows = _rows(state, show_alive, sort, VIEWS[view])
        selected = min(selected, max(0, len(rows) - 1))
        screen.fill(COLOR_BG)
        now = state.clock.now()
        status = "PAUSED" if paused else WARP_RATES[warp][0]
        locked = "  [settings locked]" if state.engine.settings.locked else ""
        draw_header(screen, font, [
            f"Year {calendar_year(now)}  |  {status}  |  "
            f"{'Alive' if show_alive else 'Deceased'}: {len(rows)}{locked}",
            f"Sort: {sort.value}  |  View: {VIEWS[view]}  |  Ranges: {state.engine.settings.ranges}",
        ])
        draw_table(screen, small_font, state, rows, selected,
                   HEADER_H + 4, SCREEN_H - HEADER_H - LOG_H - 8)
        log.draw(screen, small_font, SCREEN_H - LOG_H, LOG_H)

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
