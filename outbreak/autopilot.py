"""
AutoPilot Module for the Outbreak game.

This module implements a scripted player that drives a GameState one command per step,
using a greedy expected-score heuristic.

Algorithm Strategy:
1.  **Starter**: Among the legal patients zero, pick the one whose easiest next-level
    target has the best infection chance (ties broken by the starter's own rate).
2.  **Turn**: Score every eligible target by the points it is expected to add:
    -   Next-level chance x evolution reward (plus an apex bonus when it would win).
    -   Same-level chance x same-level penalty.
    -   A flat cost per attempt, and a prohibitive cost for red herrings.
3.  **Skip**: Attack the best target if its score clears the threshold, else let the
    day pass. A turn with no targets is always skipped.

Architecture Role:
    - AI Agent: A command source for the simulator and for unattended demo runs.
"""

from typing import Dict, List, Optional, Tuple, Union

from .game_state import GameState
from .models import EligibilityPolicy, Host, Phase
from .rules import check_starter


class PilotConfig:
    """Centralized configuration for AI tuning parameters."""

    # Weights for heuristic scoring
    WEIGHTS = {
        'NEXT_LEVEL': 200.0,    # Score gained by an evolution
        'SAME_LEVEL': -100.0,   # Score lost by a same-level infection
        'ATTEMPT': -10.0,       # Score lost by any attempt
        'APEX_BONUS': 500.0,    # Extra pull towards a winning evolution
    }

    SCORE_RED_HERRING = -1000.0  # Never worth attacking
    ATTACK_THRESHOLD = -50.0     # Skip the day when the best target scores at or below this

    def __init__(self, **params):
        self.WEIGHTS = dict(PilotConfig.WEIGHTS)
        self.update(params)

    def update(self, params: Dict[str, Union[float, int]]):
        """
        Updates tuning parameters.

        Args:
            params (dict): Keys from WEIGHTS or attribute names. Unknown keys are ignored,
                           so one dict can carry both game and pilot settings.
        """
        for key, value in params.items():
            key = key.upper()
            if key in self.WEIGHTS:
                self.WEIGHTS[key] = float(value)
            elif key in ('SCORE_RED_HERRING', 'ATTACK_THRESHOLD'):
                setattr(self, key, float(value))
        return self


class AutoPilot:
    def __init__(self, state: GameState, config: PilotConfig = None):
        self.state = state
        self.config = config if config is not None else PilotConfig()
        self.last_action = "Initialized"
        self.last_outcome = None

    def step(self) -> bool:
        """
        Issues a single command.

        Returns:
            bool: True if a command was issued, False once the run is over or no
                  legal starter exists.
        """
        if self.state.is_over:
            self.last_action = "Run Over"
            return False

        if self.state.phase is Phase.SELECTING_STARTER:
            starter = self.choose_starter()
            if starter is None:
                self.last_action = "No Valid Starter"
                return False
            self.state.choose_starter(starter)
            self.last_action = f"Started as {starter}"
            return True

        targets = self.state.targets()
        if not targets:
            self.state.skip_turn()
            self.last_action = "Skipped (no targets)"
            return True

        best, best_score = max(self.rank_targets(targets), key=lambda pair: pair[1])
        if best_score <= self.config.ATTACK_THRESHOLD:
            self.state.skip_turn()
            self.last_action = f"Skipped (best: {best}, {best_score:.1f})"
            return True

        outcome = self.state.choose_target(best)
        self.last_outcome = outcome
        self.last_action = f"Attacked {best}: {outcome.kind.value}"
        return True

    def choose_starter(self) -> Optional[str]:
        candidates = []
        for name in self.state.starters():
            host = self.state.roster.get(name)
            if check_starter(self.state.policy, host) is not None:
                continue
            candidates.append((self._best_next_chance(host), host.infection_rate, name))
        if not candidates:
            return None
        return max(candidates)[2]

    def rank_targets(self, targets: List[str]) -> List[Tuple[str, float]]:
        player = self.state.player
        return [(name, self.score_target(player, self.state.roster.get(name))) for name in targets]

    def score_target(self, player: Host, target: Host) -> float:
        """Expected change in score from attacking `target`."""
        weights = self.config.WEIGHTS
        if target.is_red_herring:
            return self.config.SCORE_RED_HERRING

        chance = min(target.infection_rate * self.state.virus.strength, 1.0)
        score = weights['ATTEMPT']
        if target.level > player.level:
            score += chance * weights['NEXT_LEVEL']
            if target.level == self.state.apex_level:
                score += chance * weights['APEX_BONUS']
        elif target.level == player.level:
            score += chance * weights['SAME_LEVEL']
        return score

    def _best_next_chance(self, host: Host) -> float:
        """Best infection chance among the hosts `host` could evolve into."""
        roster = self.state.roster
        if self.state.policy is EligibilityPolicy.LEVEL_ADJACENCY:
            pool = [h for h in roster if h.level == host.level + 1]
        else:
            pool = [roster.get(name) for name in host.contacts if name in roster]
            pool = [h for h in pool if h.level > host.level]
        rates = [h.infection_rate for h in pool if not h.is_red_herring and not h.is_infected]
        return max(rates, default=0.0) * self.state.virus.strength
