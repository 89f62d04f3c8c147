"""
This module contains the game state machine for the Outbreak game.

It defines the GameState class, the single owner of a run: the roster, the player
host, the day counter, the virus, the statistics and the current phase. The
presentation layer reads it and issues exactly three commands: choose_starter,
choose_target and skip_turn.

Architecture Role:
    - Model/Controller: Validates commands, delegates to the rules and the resolver,
      and moves the run through SelectingStarter -> Playing -> Won (or Exhausted).
    - Concurrency: Every command and every read that spans several fields runs
      under one re-entrant lock, so a timer thread may poll snapshot() or score()
      while the input thread issues commands.

Modification History:
    - 2026-10-19: Created; turn handling adapted from System.visit_node/end_turn.
"""

import dataclasses
import logging
import threading
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .exceptions import InvalidCommand, InvalidStarter, InvalidTarget
from .models import EligibilityPolicy, Host, Outcome, Phase, Roster, Stats, Virus
from .resolver import InfectionResolver
from .rules import check_starter, eligible_targets, starter_candidates
from .scoring import calculate_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusSnapshot:
    """Immutable view of a run for periodic pollers."""
    phase: Phase
    day: int
    player_name: Optional[str]
    player_level: Optional[int]
    apex_level: int
    attempts: int
    same_level_infections: int
    next_level_infections: int
    elapsed: float
    score: int
    infected: Tuple[str, ...]


class GameState(object):
    """
    Represents one run of the game.

    Attributes:
        roster (Roster): Every host of the run.
        policy (EligibilityPolicy): Rule for legal targets and starters.
        virus (Virus): The player's pathogen.
        turn_ceiling (int): Commands allowed before the run is Exhausted; None for no limit.
        facts (dict[str, RedHerringFact]): Explanations for red herrings, by host name.
        resolver (InfectionResolver): Draws outcomes from the injected random source.
        stats (Stats): The run's counters.
        phase (Phase): Where the run is in its lifecycle.
        day (int): Current day; 1 once Playing begins.
        last_outcome (Outcome): The most recent attempt, or None.
    """
    def __init__(self, roster: Roster, policy=EligibilityPolicy.LEVEL_ADJACENCY,
                 virus: Virus = None, turn_ceiling: int = None, facts=None,
                 rng=None, clock=None):
        """
        Args:
            roster (Roster): A freshly loaded roster; the run mutates it in place.
            policy (EligibilityPolicy | str): Eligibility rule.
            virus (Virus, optional): Defaults to a strength-1.0 virus.
            turn_ceiling (int, optional): Enables the Exhausted phase.
            facts (dict, optional): Red herring facts by host name.
            rng (optional): Random source with a random() method.
            clock (callable, optional): Returns the current time in seconds.
        """
        if turn_ceiling is not None and turn_ceiling < 1:
            raise ValueError(f'turn ceiling must be at least 1, got {turn_ceiling}')
        self.roster = roster
        self.policy = EligibilityPolicy.parse(policy)
        self.virus = virus if virus is not None else Virus()
        self.turn_ceiling = turn_ceiling
        self.facts = dict(facts or {})
        self.resolver = InfectionResolver(rng)
        self.clock = clock if clock is not None else time.time
        self.stats = Stats()
        self.phase = Phase.SELECTING_STARTER
        self.day = 0
        self.last_outcome = None
        self.end_time = None
        self.__player_name = None
        self._lock = threading.RLock()

    @property
    def apex_level(self) -> int:
        return self.roster.apex_level

    @property
    def player(self) -> Optional[Host]:
        """The current player host, looked up in the roster, or None before the start."""
        if self.__player_name is None:
            return None
        return self.roster.get(self.__player_name)

    @property
    def is_over(self):
        return self.phase.is_terminal

    def fact_for(self, name):
        return self.facts.get(name)

    # --- Queries ---

    def starters(self) -> List[str]:
        """Hosts to offer on the starter menu; empty outside SelectingStarter."""
        with self._lock:
            if self.phase is not Phase.SELECTING_STARTER:
                return []
            return starter_candidates(self.policy, self.roster)

    def targets(self) -> List[str]:
        """Legal infection targets this turn; empty outside Playing."""
        with self._lock:
            if self.phase is not Phase.PLAYING:
                return []
            return eligible_targets(self.policy, self.player, self.roster)

    def elapsed(self) -> float:
        """Seconds since patient zero was chosen, frozen once the run is over."""
        with self._lock:
            now = self.end_time if self.end_time is not None else self.clock()
            return self.stats.elapsed(now)

    def score(self) -> int:
        with self._lock:
            return calculate_score(self.stats, self.elapsed())

    def snapshot(self) -> StatusSnapshot:
        with self._lock:
            player = self.player
            elapsed = self.elapsed()
            return StatusSnapshot(
                phase=self.phase,
                day=self.day,
                player_name=player.name if player else None,
                player_level=player.level if player else None,
                apex_level=self.apex_level,
                attempts=self.stats.attempts,
                same_level_infections=self.stats.same_level_infections,
                next_level_infections=self.stats.next_level_infections,
                elapsed=elapsed,
                score=calculate_score(self.stats, elapsed),
                infected=tuple(host.name for host in self.roster.infected()),
            )

    def stats_copy(self) -> Stats:
        with self._lock:
            return self.stats.copy()

    # --- Commands ---

    def choose_starter(self, name: str) -> Host:
        """
        Picks patient zero and starts the run.

        Raises:
            InvalidCommand: The run is past starter selection.
            InvalidStarter: Unknown host, red herring, or (level-adjacency) not level 1.
        """
        with self._lock:
            self._require_phase(Phase.SELECTING_STARTER, 'ChooseStarter')
            if name not in self.roster:
                logger.debug("Rejected starter %r: unknown host", name)
                raise InvalidStarter(f'no host named {name!r}', host_name=name)

            host = self.roster.get(name)
            reason = check_starter(self.policy, host)
            if reason is not None:
                logger.debug("Rejected starter %s: %s", name, reason)
                fact = self.fact_for(name) if host.is_red_herring else None
                raise InvalidStarter(reason, host_name=name, fact=fact)

            if not host.is_infected:
                self.roster.infect(name)
            self.stats.start_time = self.clock()
            self.__player_name = name
            self.day = 1
            self.phase = Phase.PLAYING
            logger.info("Patient zero: %s (level %d); apex level is %d",
                        name, host.level, self.apex_level)
            return host

    def choose_target(self, name: str) -> Outcome:
        """
        Attempts to infect a host from the current eligibility list.

        Raises:
            InvalidCommand: The run is not Playing.
            InvalidTarget: `name` is not in targets().
        """
        with self._lock:
            self._require_phase(Phase.PLAYING, 'ChooseTarget')
            player = self.player
            if name not in eligible_targets(self.policy, player, self.roster):
                fact = None
                if name in self.roster and self.roster.get(name).is_red_herring:
                    fact = self.fact_for(name)
                logger.debug("Rejected target %r for %s", name, player.name)
                raise InvalidTarget(f'{name} is not a legal target for {player.name}',
                                    host_name=name, fact=fact)

            target = self.roster.get(name)
            outcome = self.resolver.attempt(player, target, self.virus, self.stats,
                                            self.roster, fact=self.fact_for(name))

            if outcome.evolved:
                self.__player_name = target.name
                logger.info("Evolution: %s (level %d) -> %s (level %d)",
                            player.name, player.level, target.name, target.level)
                if target.level == self.apex_level:
                    outcome = dataclasses.replace(outcome, won=True)
                    self._finish(Phase.WON)

            self._advance_day()
            self.last_outcome = outcome
            return outcome

    def skip_turn(self):
        """Lets a day pass without an attempt."""
        with self._lock:
            self._require_phase(Phase.PLAYING, 'SkipTurn')
            logger.debug("Day %d skipped", self.day)
            self.last_outcome = None
            self._advance_day()

    # --- Internals ---

    def _require_phase(self, expected, command):
        if self.phase is not expected:
            raise InvalidCommand(f'{command} is not accepted while {self.phase.value}')

    def _advance_day(self):
        self.day += 1
        if (self.phase is Phase.PLAYING and self.turn_ceiling is not None
                and self.day > self.turn_ceiling):
            self._finish(Phase.EXHAUSTED)

    def _finish(self, phase):
        self.phase = phase
        self.end_time = self.clock()
        logger.info("Run ended: %s on day %d (attempts=%d, next=%d, same=%d)",
                    phase.value, self.day, self.stats.attempts,
                    self.stats.next_level_infections, self.stats.same_level_infections)
