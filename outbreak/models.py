"""
This module defines the core data models for the Outbreak game.

It serves as the "Model" layer: the hosts of the food chain (Host), the roster that
owns them (Roster), the player's pathogen (Virus), the running statistics (Stats)
and the value objects the engine hands to the presentation layer (Outcome,
RedHerringFact). The enumerations that configure and describe a run live here too.

Architecture Role:
    - Model: Encapsulates the entities and their invariants.
    - Identity: Hosts are owned by the Roster and referenced by name; nothing else
      holds detached copies, so an infection is visible through every view.

Modification History:
    - 2026-10-19: Created from the hacking-board models (Node/Token -> Host/Roster).
"""

import enum
from dataclasses import dataclass
from typing import Dict, List, Optional

from .exceptions import DuplicateHost, EmptyRoster, HostNotFound


class EligibilityPolicy(enum.Enum):
    """Rule that decides which hosts may be targeted on a turn."""
    LEVEL_ADJACENCY = 'level_adjacency'
    CONTACT_GRAPH = 'contact_graph'

    @classmethod
    def parse(cls, value):
        """Accepts a member, its value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace('-', '_')
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f'unknown eligibility policy: {value!r}')


class Phase(enum.Enum):
    SELECTING_STARTER = 'selecting_starter'
    PLAYING = 'playing'
    WON = 'won'
    EXHAUSTED = 'exhausted'

    @property
    def is_terminal(self):
        return self in (Phase.WON, Phase.EXHAUSTED)


class OutcomeKind(enum.Enum):
    SUCCESS = 'success'
    FAILURE = 'failure'
    BLOCKED = 'blocked'


@dataclass(frozen=True)
class RedHerringFact:
    """Flavor text shown when a player runs into a red herring."""
    fun_fact: str
    reason: str


@dataclass(frozen=True)
class Outcome:
    """
    Result of one infection attempt, as emitted to the presentation layer.

    Attributes:
        kind (OutcomeKind): Success, Failure or Blocked.
        host_name (str): The targeted host.
        chance (float): Infection chance used for the draw; None when Blocked.
        evolved (bool): True if the player host migrated to the target.
        new_level (int): Level of the new player host when evolved, else None.
        won (bool): True if this attempt ended the run in the Won phase.
        fact (RedHerringFact): Explanation for a Blocked attempt, if one is known.
    """
    kind: OutcomeKind
    host_name: str
    chance: Optional[float] = None
    evolved: bool = False
    new_level: Optional[int] = None
    won: bool = False
    fact: Optional[RedHerringFact] = None

    @property
    def is_success(self):
        return self.kind is OutcomeKind.SUCCESS


class Host(object):
    """
    Represents a single animal in the food chain.

    Attributes:
        name (str): Unique identifier, used as the Roster key.
        level (int): Food-chain tier, starting at 1.
        infection_rate (float): Base susceptibility in [0, 1].
        is_red_herring (bool): Red herrings can never be infected or started from.
        contacts (list[str]): Names of hosts this one can reach directly.
        metadata (dict): Presentation-only fields (mobility, intelligence, location...).
    """
    def __init__(self, name: str, level: int, infection_rate: float,
                 is_red_herring: bool = False, is_infected: bool = False,
                 contacts=None, metadata=None):
        if not isinstance(name, str) or not name:
            raise ValueError('host name must be a non-empty string')
        if isinstance(level, bool) or not isinstance(level, int) or level < 1:
            raise ValueError(f'{name}: level must be a positive integer, got {level!r}')
        if isinstance(infection_rate, bool) or not isinstance(infection_rate, (int, float)):
            raise ValueError(f'{name}: infection rate must be a number, got {infection_rate!r}')
        if not 0.0 <= infection_rate <= 1.0:
            raise ValueError(f'{name}: infection rate must be within [0, 1], got {infection_rate}')
        if is_red_herring and is_infected:
            raise ValueError(f'{name}: a red herring cannot start infected')
        self.name = name
        self.level = level
        self.infection_rate = float(infection_rate)
        self.is_red_herring = bool(is_red_herring)
        self.contacts = list(contacts or [])
        self.metadata = dict(metadata or {})
        self.__infected = bool(is_infected)

    @property
    def is_infected(self):
        """Infection is one-way: there is no setter, only infect()."""
        return self.__infected

    def infect(self):
        if self.is_red_herring:
            raise RuntimeError(f'cannot infect red herring {self.name}!')
        self.__infected = True

    @property
    def image_path(self):
        return self.metadata.get('image_path', f'png/{self.name}.png')

    def __repr__(self):
        return (f'Host({self.name!r}, level={self.level}, rate={self.infection_rate}, '
                f'infected={self.is_infected}, red_herring={self.is_red_herring})')


class Virus(object):
    """
    The player's pathogen.

    Attributes:
        strength (float): Multiplier applied to every infection chance.
        modes (list[str]): Transmission modes, descriptive only.
    """
    def __init__(self, strength: float = 1.0, modes=None):
        if not strength >= 0:
            raise ValueError(f'virus strength must be >= 0, got {strength}')
        self.strength = float(strength)
        self.modes = list(modes) if modes is not None else ['Bite']


class Stats(object):
    """
    Running counters for one run. All counters only ever go up.

    Attributes:
        attempts (int): Resolved infection attempts, blocked ones included.
        same_level_infections (int): Successes on a host of the player's level.
        next_level_infections (int): Successes that evolved the player.
        start_time (float): Clock reading when patient zero was chosen.
    """
    def __init__(self):
        self.attempts = 0
        self.same_level_infections = 0
        self.next_level_infections = 0
        self.start_time = None

    def elapsed(self, now: float) -> float:
        """Seconds since the start mark, or 0 before a starter is chosen."""
        if self.start_time is None:
            return 0.0
        return now - self.start_time

    def copy(self):
        other = Stats()
        other.attempts = self.attempts
        other.same_level_infections = self.same_level_infections
        other.next_level_infections = self.next_level_infections
        other.start_time = self.start_time
        return other


class Roster(object):
    """
    Owns every Host of a run, keyed by name, in load order.

    The set of hosts is fixed at construction; the only mutation is flipping a
    host's infection flag through infect().
    """
    def __init__(self, hosts):
        self.__hosts: Dict[str, Host] = {}
        for host in hosts:
            if host.name in self.__hosts:
                raise DuplicateHost(f'duplicate host name: {host.name!r}')
            self.__hosts[host.name] = host
        if not self.__hosts:
            raise EmptyRoster('roster contains no hosts')
        self.__apex_level = max(host.level for host in self.__hosts.values())

    @property
    def apex_level(self) -> int:
        return self.__apex_level

    def get(self, name: str) -> Host:
        try:
            return self.__hosts[name]
        except KeyError:
            raise HostNotFound(name) from None

    def all(self) -> List[Host]:
        return list(self.__hosts.values())

    def names(self) -> List[str]:
        return list(self.__hosts)

    def infected(self) -> List[Host]:
        return [host for host in self.__hosts.values() if host.is_infected]

    def infect(self, name: str) -> Host:
        host = self.get(name)
        host.infect()
        return host

    def __contains__(self, name):
        return name in self.__hosts

    def __iter__(self):
        return iter(self.__hosts.values())

    def __len__(self):
        return len(self.__hosts)
