"""
This module contains the terminal game engine for the Outbreak game.

It defines the GameEngine class, which acts as the central controller of the curses
front end. It manages the main loop, processes user input (keyboard and mouse), and
turns the player's choices into GameState commands.

Architecture Role:
    - Controller: Mediates between the Model (GameState) and View (StateRenderer).
    - Game Loop: Redraws once per second so the timer and live score keep moving.

Modification History:
    - 2026-10-19: Adapted from the hacking-board loop to the infection game.
"""

import curses
import logging

from .config import Config
from .exceptions import InvalidCommand
from .models import Outcome, OutcomeKind, Phase
from .rendering import StateRenderer
from .utils import get_menu_index_at_mouse, get_menu_index_for_key

logger = logging.getLogger(__name__)

TICK_MS = 1000  # getch() timeout; a timeout only redraws


def describe_fact(fact):
    if fact is None:
        return []
    return [f'🐾 Fun Fact: {fact.fun_fact}', f'📌 Reason: {fact.reason}']


def describe_outcome(outcome: Outcome, previous_level: int):
    """Returns the message lines for a resolved attempt."""
    if outcome.kind is OutcomeKind.BLOCKED:
        return [f'🚫 RED HERRING - {outcome.host_name} cannot be infected.'] + describe_fact(outcome.fact)
    if outcome.kind is OutcomeKind.FAILURE:
        return [f'🛑 FAILED: {outcome.host_name} resisted infection ({outcome.chance:.0%} chance).']
    lines = [f'💥 SUCCESS: {outcome.host_name} is now infected!']
    if outcome.evolved:
        lines.append(f'🔄 EVOLUTION: You now inhabit {outcome.host_name}.')
        lines.append(f'⬆️ Level Up: {previous_level} → {outcome.new_level}')
    else:
        lines.append('(Same level - no evolution)')
    if outcome.won:
        lines.append('🏆 YOU WIN! You reached the top of the food chain.')
    return lines


class GameEngine(object):
    """
    Manages the main loop of the terminal game.

    This class is responsible for:
    1. Building runs from the configuration (and rebuilding them on restart).
    2. Running the main loop (render -> input -> update).
    3. Translating key presses and clicks into commands.
    4. Skipping turns that have no legal target.
    """

    def __init__(self, screen, config: Config = None):
        """
        Args:
            screen (curses.window): The main curses screen object.
            config (Config, optional): Run settings; defaults to Config().
        """
        self.screen = screen
        self.config = config if config is not None else Config()
        self.renderer = StateRenderer()
        self.running = True
        self.restart()

    def _setup_curses(self):
        """
        Configures the curses environment: no echo, instant keys, hidden cursor,
        mouse events, and a one-second input timeout for the live timer.
        """
        curses.noecho()
        curses.cbreak()
        curses.curs_set(0)
        curses.start_color()
        self.renderer.init_colors()
        self.screen.keypad(True)
        curses.mousemask(curses.ALL_MOUSE_EVENTS)
        self.screen.timeout(TICK_MS)

    def restart(self):
        """Starts a fresh run on a freshly loaded roster."""
        self.state = self.config.create_state()
        self.message = ['Deep beneath Yellowstone, something ancient awakens.',
                        'Start at the bottom of the food chain, infect, evolve.']
        self.revealed = set()
        logger.info("New run (policy=%s, strength=%.2f, ceiling=%s)",
                    self.state.policy.value, self.state.virus.strength, self.state.turn_ceiling)

    def run(self):
        """
        Starts and runs the main loop until the player quits.

        This is a blocking call.
        """
        self._setup_curses()
        while self.running:
            self.skip_if_stuck()
            self.renderer.render(self.state, self.screen, self.message, self.revealed)
            ch = self.screen.getch()
            if ch == -1:
                continue
            self.handle_input(ch)

    def menu(self):
        return [name for name, _ in self.renderer.get_menu_entries(self.state)]

    def handle_input(self, ch):
        """Processes one key code from getch()."""
        if ch in (ord('q'), ord('Q')):
            self.running = False
            return

        if ch in (curses.KEY_ENTER, 10, 13):
            if self.state.is_over:
                self.restart()
            return

        if self.state.is_over:
            return

        if ch in (ord('s'), ord('S')) and self.state.phase is Phase.PLAYING:
            self.state.skip_turn()
            self.message = ['⏸ Turn skipped.']
            return

        menu = self.menu()
        if ch == curses.KEY_MOUSE:
            try:
                _, _, my, _, _ = curses.getmouse()
            except curses.error:
                return
            index = get_menu_index_at_mouse(self.renderer.menu_y, len(menu), my)
        else:
            index = get_menu_index_for_key(ch, len(menu))

        if index is not None:
            self.select(menu[index])

    def select(self, name):
        """Issues the command for a chosen menu entry and records the message to show."""
        try:
            if self.state.phase is Phase.SELECTING_STARTER:
                host = self.state.choose_starter(name)
                self.message = [f'🔥 You start as: {host.name} (Level {host.level})',
                                f'🎯 Goal: Reach Level {self.state.apex_level} as efficiently as possible.']
            else:
                previous_level = self.state.player.level
                outcome = self.state.choose_target(name)
                if outcome.kind is OutcomeKind.BLOCKED:
                    self.revealed.add(name)
                self.message = describe_outcome(outcome, previous_level)
        except InvalidCommand as exc:
            if exc.host_name in self.state.roster and self.state.roster.get(exc.host_name).is_red_herring:
                self.revealed.add(exc.host_name)
            self.message = [f'🚫 {exc}'] + describe_fact(exc.fact)

    def skip_if_stuck(self):
        """Skips the day when the player has nothing to target."""
        if self.state.phase is Phase.PLAYING and not self.state.targets():
            self.state.skip_turn()
            self.message = ['(No valid targets - skipping day.)']
