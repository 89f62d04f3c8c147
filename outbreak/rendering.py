"""
This module handles the rendering of a run on the terminal using the curses library.

It defines the StateRenderer class, which draws the header (day, host, timer, live
score), the infection status of every host, the menu of starters or targets, the
last message and, once the run is over, the final summary.

Architecture Role:
    - View: Displays the game state to the user. It only reads the GameState.

Modification History:
    - 2026-10-19: Rewritten from the hexagonal board renderer for the host roster.
"""

import curses

from .game_state import GameState
from .models import Host, Phase
from .utils import format_elapsed, menu_key

RED = 1
GREEN = 2
YELLOW = 3


class StateRenderer(object):
    """
    Draws a GameState on a curses screen.

    Attributes:
        menu_y (int): Screen row of the first menu entry from the last render, or -1.
                      The engine uses it to map mouse clicks to entries.
    """

    def __init__(self):
        self.menu_y = -1

    def init_colors(self):
        """Registers the color pairs used by render(); needs an initialized screen."""
        curses.init_pair(RED, curses.COLOR_RED, curses.COLOR_BLACK)
        curses.init_pair(GREEN, curses.COLOR_GREEN, curses.COLOR_BLACK)
        curses.init_pair(YELLOW, curses.COLOR_YELLOW, curses.COLOR_BLACK)

    def get_host_string(self, state: GameState, host: Host, revealed=()) -> str:
        """
        Returns the status label of a host for the infection list.

        Red herrings look healthy until the player has run into them.
        """
        player = state.player
        if player is not None and host.name == player.name:
            return '🦠 HOST'
        if host.is_infected:
            return '☣ INFECTED'
        if host.is_red_herring and host.name in revealed:
            return '🚫 Red Herring'
        return '😐 Healthy'

    def get_menu_entries(self, state: GameState):
        """Returns the (name, label) pairs of the menu for the current phase."""
        entries = []
        if state.phase is Phase.SELECTING_STARTER:
            for name in state.starters():
                host = state.roster.get(name)
                entries.append((name, f'{name} (Level {host.level})'))
        elif state.phase is Phase.PLAYING:
            for name in state.targets():
                host = state.roster.get(name)
                chance = host.infection_rate * state.virus.strength
                entries.append((name, f'{name} (L{host.level}, {chance:.0%})'))
        return entries

    def render(self, state: GameState, screen, message=(), revealed=()):
        """
        Renders the whole run on the provided curses screen.

        Args:
            state (GameState): The run to draw.
            screen (curses.window): The curses screen object to draw on.
            message (list[str]): Lines describing the last command's result.
            revealed (set[str]): Red herrings the player has already run into.
        """
        screen.erase()
        y = 0
        snapshot = state.snapshot()

        self._put(screen, y, '🦠 YELLOWSTONE OUTBREAK', curses.A_BOLD)
        y += 2

        if snapshot.phase is Phase.SELECTING_STARTER:
            self._put(screen, y, 'Choose your patient zero:')
            y += 1
        else:
            self._put(screen, y, f'DAY {snapshot.day} - {snapshot.player_name} '
                                 f'(Level {snapshot.player_level}) | Goal: Level {snapshot.apex_level}')
            y += 1
            self._put(screen, y, f'⏱ {format_elapsed(snapshot.elapsed)} | Score: {snapshot.score} | '
                                 f'Attempts: {snapshot.attempts} | Evolutions: {snapshot.next_level_infections}')
            y += 2

            self._put(screen, y, 'Infection Status:')
            y += 1
            for host in state.roster:
                label = self.get_host_string(state, host, revealed)
                color = RED if host.is_infected else GREEN
                self._put(screen, y, f' - {host.name:<22} : {label}', curses.color_pair(color))
                y += 1
        y += 1

        # --- Menu ---
        entries = self.get_menu_entries(state)
        self.menu_y = -1
        if entries:
            self._put(screen, y, 'Who do you want to infect?' if snapshot.phase is Phase.PLAYING
                      else 'Starters:')
            y += 1
            self.menu_y = y
            for index, (_, label) in enumerate(entries):
                self._put(screen, y, f'{menu_key(index)}) {label}')
                y += 1
        if snapshot.phase is Phase.PLAYING:
            self._put(screen, y, 's) Skip turn')
            y += 1
        y += 1

        for line in message:
            self._put(screen, y, line, curses.color_pair(YELLOW))
            y += 1

        # --- Terminal summary ---
        if snapshot.phase.is_terminal:
            y += 1
            if snapshot.phase is Phase.WON:
                title = f'🏆 APEX PREDATOR REACHED: {snapshot.player_name} (Level {snapshot.player_level})'
            else:
                title = '🏁 SIMULATION ENDED (no apex reached)'
            self._put(screen, y, title, curses.A_BOLD)
            y += 1
            for line in (
                f'⏱ Time Taken: {format_elapsed(snapshot.elapsed)}',
                f'🎯 Attempts: {snapshot.attempts}',
                f'👍 Next-level infections: {snapshot.next_level_infections}',
                f'👎 Same-level infections: {snapshot.same_level_infections}',
                f'📊 FINAL SCORE: {snapshot.score} points',
                '',
                'Press ENTER to play again, q to quit.',
            ):
                self._put(screen, y, line)
                y += 1

        screen.refresh()

    def _put(self, screen, y, text, attr=0):
        # Lines past the bottom of a small terminal are dropped
        try:
            screen.addstr(y, 0, text, attr)
        except curses.error:
            pass
