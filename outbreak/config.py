"""
Configuration for the Outbreak game.

A Config holds every tunable of a run. Defaults are class attributes; an instance
can be adjusted from a dict (update), a JSON file (load / try_load) or the
environment (apply_env), and then builds fresh GameStates (create_state).
"""

import json
import logging
import os
import random
from typing import Any, Dict

from .game_state import GameState
from .loader import build_roster, load_red_herring_facts
from .models import EligibilityPolicy, Virus

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(PROJECT_ROOT, 'data')

ENV_VARS = {
    'OUTBREAK_POLICY': 'POLICY',
    'OUTBREAK_STRENGTH': 'VIRUS_STRENGTH',
    'OUTBREAK_TURN_CEILING': 'TURN_CEILING',
    'OUTBREAK_SEED': 'SEED',
    'OUTBREAK_ROSTER': 'ROSTER_PATH',
    'OUTBREAK_FACTS': 'FACTS_PATH',
}


class Config:
    """Centralized configuration for a run."""

    POLICY = EligibilityPolicy.LEVEL_ADJACENCY
    VIRUS_STRENGTH = 1.0
    VIRUS_MODES = ['Bite']
    TURN_CEILING = None  # None: play until the apex is reached
    SEED = None          # None: unseeded random source
    ROSTER_PATH = os.path.join(DATA_DIR, 'yellowstone_animals.json')
    FACTS_PATH = os.path.join(DATA_DIR, 'red_herring_facts.json')
    LOG_FILE = 'outbreak.log'

    _OPTIONAL_INTS = ('TURN_CEILING', 'SEED')

    def __init__(self, **params):
        self.VIRUS_MODES = list(Config.VIRUS_MODES)
        self.update(params)

    def update(self, params: Dict[str, Any]):
        """
        Applies parameter overrides.

        Args:
            params (dict): Attribute names (any case) and values. Values are coerced
                           to the attribute's type; unknown keys are ignored.

        Returns:
            Config: self, for chaining.
        """
        # All values are coerced before any is applied, so a bad value changes nothing
        coerced = {}
        for key, value in params.items():
            key = key.upper()
            if key.startswith('_') or not hasattr(Config, key) or callable(getattr(Config, key)):
                continue
            coerced[key] = self._coerce(key, value)
        for key, value in coerced.items():
            setattr(self, key, value)
        return self

    def _coerce(self, key, value):
        if key == 'POLICY':
            return EligibilityPolicy.parse(value)
        if key in self._OPTIONAL_INTS:
            if value is None or str(value).strip().lower() in ('', 'none'):
                return None
            return int(value)
        if key == 'VIRUS_MODES':
            if isinstance(value, str):
                return [mode.strip() for mode in value.split(',') if mode.strip()]
            return list(value)
        current_type = type(getattr(Config, key))
        return current_type(value)

    @classmethod
    def load(cls, path):
        """Builds a Config from a JSON object of overrides."""
        with open(path, 'r', encoding='utf-8') as f:
            params = json.load(f)
        if not isinstance(params, dict):
            raise ValueError(f'{path}: configuration must be a JSON object')
        return cls().update(params)

    def try_load(self, filename='outbreak.json'):
        """Applies overrides from `filename` in the working directory or project root, if present."""
        possible_paths = [filename]
        in_root = os.path.join(PROJECT_ROOT, filename)
        if os.path.abspath(in_root) != os.path.abspath(filename):
            possible_paths.append(in_root)

        for path in possible_paths:
            if not os.path.exists(path):
                continue
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    params = json.load(f)
                self.update(params)
                logger.info("Loaded configuration from %s", path)
                return True
            except (OSError, ValueError, TypeError, AttributeError) as exc:
                logger.warning("Ignoring configuration file %s: %s", path, exc)
        return False

    def apply_env(self, environ=None):
        environ = os.environ if environ is None else environ
        params = {attr: environ[var] for var, attr in ENV_VARS.items() if var in environ}
        return self.update(params)

    @classmethod
    def from_env(cls, environ=None):
        return cls().apply_env(environ)

    def create_state(self, rng=None, clock=None) -> GameState:
        """
        Loads a fresh roster and builds a new run from this configuration.

        Raises:
            LoadError, EmptyRoster: The roster file cannot start a run.
        """
        roster = build_roster(self.ROSTER_PATH)
        facts = load_red_herring_facts(self.FACTS_PATH)
        if rng is None and self.SEED is not None:
            rng = random.Random(self.SEED)
        return GameState(
            roster,
            policy=self.POLICY,
            virus=Virus(self.VIRUS_STRENGTH, self.VIRUS_MODES),
            turn_ceiling=self.TURN_CEILING,
            facts=facts,
            rng=rng,
            clock=clock,
        )
