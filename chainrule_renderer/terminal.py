#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/terminal.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import curses
import logging

from .color import rgb_to_ansi8, rgb_to_xterm256

logger = logging.getLogger(__name__)


class ColorPairs:
    """
    Lazily allocated curses colour pairs keyed by (foreground, background).

    Color mode cascade:
      1. xterm-256 – 256+ colors: nearest xterm-256 index
      2. 8-color   – basic ANSI palette approximation
      3. Mono      – no color (every lookup returns pair 0)
    When the terminal runs out of pairs, further combinations fall back to
    pair 0.
    """

    def __init__(self, use_color: bool = True):
        self.use_color = use_color
        self.enabled = False
        self.depth = 0
        self.limit = 0
        self._pairs = {}
        self._next = 1

    def init(self):
        """Start curses colour support. Call once after curses.wrapper init."""
        if not self.use_color:
            return
        try:
            if not curses.has_colors():
                return
            curses.start_color()
            num_colors = curses.COLORS
            self.limit = curses.COLOR_PAIRS
        except curses.error:
            logger.info("terminal colour init failed, using monochrome")
            return
        if num_colors >= 256:
            self.depth = 256
        elif num_colors >= 8:
            self.depth = 8
        else:
            return
        self.enabled = True
        logger.debug("colour mode %d, %d pairs", self.depth, self.limit)

    def index(self, color) -> int:
        r, g, b = color.rgb
        if self.depth >= 256:
            return rgb_to_xterm256(r, g, b)
        return rgb_to_ansi8(r, g, b)

    def attr(self, fg, bg) -> int:
        """curses attribute for a fg/bg colour combination."""
        if not self.enabled:
            return curses.color_pair(0)
        bg_idx = self.index(bg)
        fg_idx = self.index(fg) if fg is not None else bg_idx
        key = (fg_idx, bg_idx)
        pair = self._pairs.get(key)
        if pair is None:
            if self._next >= self.limit:
                return curses.color_pair(0)
            pair = self._next
            try:
                curses.init_pair(pair, fg_idx, bg_idx)
                self._next += 1
            except curses.error:
                pair = 0
            self._pairs[key] = pair
        return curses.color_pair(pair)


def blit(stdscr, canvas, pairs: ColorPairs, use_braille: bool = True, top: int = 1):
    """
    Copy a TerminalCanvas to the curses screen starting at row `top`.

    Does NOT call stdscr.refresh(); the caller does that after drawing any
    HUD lines.
    """
    th, tw = stdscr.getmaxyx()
    for row, col, char, fg, bg in canvas.cells(use_braille):
        y = row + top
        if y >= th - 1 or col >= tw - 1:
            continue
        try:
            stdscr.addstr(y, col, char, pairs.attr(fg, bg))
        except curses.error:
            pass

    for row, col, text, color in canvas.labels:
        y = row + top
        if y >= th - 1 or col >= tw - 1:
            continue
        try:
            stdscr.addstr(y, col, text[:tw - 1 - col],
                          pairs.attr(color, canvas.background) | curses.A_BOLD)
        except curses.error:
            pass
