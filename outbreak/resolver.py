"""
Infection resolution for the Outbreak game.

The resolver turns one chosen target into an Outcome: it draws from the injected
random source, flips the infection flag, bumps the counters and reports whether
the player evolved. Win detection is left to the GameState.
"""

import logging
import random

from .models import Host, Outcome, OutcomeKind, Roster, Stats, Virus

logger = logging.getLogger(__name__)


class InfectionResolver(object):
    """
    Resolves infection attempts against a random source.

    Attributes:
        rng: Any object with a random() method returning floats in [0, 1).
             Defaults to a private random.Random instance.
    """
    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()

    def attempt(self, player: Host, target: Host, virus: Virus, stats: Stats,
                roster: Roster, fact=None) -> Outcome:
        """
        Attempts to infect `target` from `player`.

        A red herring is Blocked without a draw. Otherwise the chance is
        target.infection_rate * virus.strength (unclamped) and one draw below it is a
        Success. Every call counts as exactly one attempt.

        The draw happens before anything is written, so a failing random source
        leaves all state untouched.

        Args:
            player (Host): The current player host.
            target (Host): The host under attack.
            virus (Virus): The player's pathogen.
            stats (Stats): Counters to update.
            roster (Roster): Owner of both hosts; the infection flag is flipped here.
            fact (RedHerringFact, optional): Explanation attached to a Blocked outcome.

        Returns:
            Outcome: The resolved attempt. `won` is always False here.
        """
        if target.is_red_herring:
            stats.attempts += 1
            logger.debug("Attempt %s -> %s blocked: red herring", player.name, target.name)
            return Outcome(OutcomeKind.BLOCKED, target.name, fact=fact)

        chance = target.infection_rate * virus.strength
        draw = self.rng.random()

        stats.attempts += 1
        if draw >= chance:
            logger.debug("Attempt %s -> %s failed (chance %.2f, draw %.3f)",
                         player.name, target.name, chance, draw)
            return Outcome(OutcomeKind.FAILURE, target.name, chance=chance)

        roster.infect(target.name)
        evolved = target.level > player.level
        if evolved:
            stats.next_level_infections += 1
        elif target.level == player.level:
            stats.same_level_infections += 1
        logger.debug("Attempt %s -> %s succeeded (chance %.2f, draw %.3f)",
                     player.name, target.name, chance, draw)
        return Outcome(
            OutcomeKind.SUCCESS,
            target.name,
            chance=chance,
            evolved=evolved,
            new_level=target.level if evolved else None,
        )
