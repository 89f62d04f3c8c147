"""
Eligibility rules for the Outbreak game.

Two policies decide who the player may target on a turn:

- LEVEL_ADJACENCY: any healthy, non-red-herring host on the player's level or one
  above it. Contacts are ignored. Output follows roster order.
- CONTACT_GRAPH: any healthy host named in the player's contact list. Red herrings
  stay in the list as traps; attacking one is a Blocked attempt. Output follows
  contact order.

An empty result means the turn has nothing to attack and is skipped.
"""

from typing import List

from .models import EligibilityPolicy, Host, Roster

STARTER_LEVEL = 1


def eligible_targets(policy: EligibilityPolicy, player: Host, roster: Roster) -> List[str]:
    """
    Computes the legal infection targets for the current turn.

    Args:
        policy (EligibilityPolicy): The configured rule.
        player (Host): The current player host.
        roster (Roster): All hosts of the run.

    Returns:
        list[str]: Names of the eligible hosts, possibly empty.
    """
    if policy is EligibilityPolicy.LEVEL_ADJACENCY:
        return [
            host.name for host in roster
            if not host.is_infected
            and not host.is_red_herring
            and host.level in (player.level, player.level + 1)
        ]

    targets = []
    for name in player.contacts:
        # Unknown contacts and repeats are dropped
        if name not in roster or name in targets or name == player.name:
            continue
        if not roster.get(name).is_infected:
            targets.append(name)
    return targets


def check_starter(policy: EligibilityPolicy, host: Host):
    """
    Returns the reason `host` cannot be patient zero, or None if it can.

    Red herrings are refused under every policy; level-adjacency also insists on
    a level-1 host.
    """
    if host.is_red_herring:
        return f'{host.name} is a red herring and cannot be patient zero'
    if policy is EligibilityPolicy.LEVEL_ADJACENCY and host.level != STARTER_LEVEL:
        return f'{host.name} is level {host.level}; patient zero must be level {STARTER_LEVEL}'
    return None


def starter_candidates(policy: EligibilityPolicy, roster: Roster) -> List[str]:
    """
    Hosts offered on the starter menu.

    Level-adjacency offers every level-1 host, red herrings included, so picking one
    can be refused with an explanation. Contact-graph offers every host.
    """
    if policy is EligibilityPolicy.LEVEL_ADJACENCY:
        return [host.name for host in roster if host.level == STARTER_LEVEL]
    return roster.names()
