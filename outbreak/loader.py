"""
Loaders for the roster and red herring fact files.

Roster files map group names to arrays of animals:

    {"Insects": [{"Name": "Mosquito", "Level": 1, "InfectionRate": 0.8,
                  "Contacts": ["Deer Mouse"], "RedHerring": false, ...}]}

A top-level array of animals is accepted as well. Keys other than Name, Level,
InfectionRate, RedHerring, Infected and Contacts are kept as host metadata.

Fact files map host names to {"FunFact": ..., "Reason": ...}.
"""

import json
import logging
import os
from typing import Dict, List, Tuple

from .exceptions import LoadError
from .models import Host, RedHerringFact, Roster

logger = logging.getLogger(__name__)

ENGINE_KEYS = ('Name', 'Level', 'InfectionRate', 'RedHerring', 'Infected', 'Contacts')


def _read_json(path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def _parse_host(raw, path) -> Host:
    if not isinstance(raw, dict):
        raise LoadError(f'{path}: expected an animal object, got {type(raw).__name__}')
    if 'Name' not in raw or 'Level' not in raw:
        raise LoadError(f'{path}: animal entry is missing Name or Level: {raw!r}')

    contacts = raw.get('Contacts') or []
    if not isinstance(contacts, list) or not all(isinstance(c, str) for c in contacts):
        raise LoadError(f'{path}: {raw["Name"]}: Contacts must be a list of names')

    metadata = {key: value for key, value in raw.items() if key not in ENGINE_KEYS}
    try:
        return Host(
            name=raw['Name'],
            level=raw['Level'],
            infection_rate=raw.get('InfectionRate', 0.0),
            is_red_herring=bool(raw.get('RedHerring', False)),
            is_infected=bool(raw.get('Infected', False)),
            contacts=contacts,
            metadata=metadata,
        )
    except ValueError as exc:
        raise LoadError(f'{path}: {exc}') from exc


def load_roster(path) -> Tuple[List[Host], int]:
    """
    Reads the hosts from a roster file.

    Args:
        path (str): Path to the JSON roster.

    Returns:
        tuple: (hosts, apex_level). An empty file section yields ([], 0); turning
               that into a run is refused by Roster with EmptyRoster.

    Raises:
        LoadError: The file is unreadable, not JSON, or not shaped like a roster.
    """
    try:
        raw = _read_json(path)
    except OSError as exc:
        raise LoadError(f'cannot read roster {path}: {exc}') from exc
    except json.JSONDecodeError as exc:
        raise LoadError(f'roster {path} is not valid JSON: {exc}') from exc

    if isinstance(raw, dict):
        groups = list(raw.values())
    elif isinstance(raw, list):
        groups = [raw]
    else:
        raise LoadError(f'roster {path} must be an object of groups or an array of animals')

    hosts = []
    for group in groups:
        if not isinstance(group, list):
            raise LoadError(f'roster {path}: every group must be an array of animals')
        hosts.extend(_parse_host(entry, path) for entry in group)

    apex_level = max((host.level for host in hosts), default=0)
    logger.info("Loaded %d hosts from %s (apex level %d)", len(hosts), path, apex_level)
    return hosts, apex_level


def build_roster(path) -> Roster:
    """Loads a roster file into a Roster (LoadError, DuplicateHost or EmptyRoster on failure)."""
    hosts, _ = load_roster(path)
    return Roster(hosts)


def load_red_herring_facts(path) -> Dict[str, RedHerringFact]:
    """
    Reads red herring explanations. A missing or malformed file yields no facts.
    """
    if not path or not os.path.exists(path):
        logger.warning("No red herring facts file found at %s", path)
        return {}
    try:
        raw = _read_json(path)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable red herring facts %s: %s", path, exc)
        return {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring red herring facts %s: expected an object", path)
        return {}

    facts = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            logger.warning("Skipping malformed fact entry for %s", name)
            continue
        facts[name] = RedHerringFact(
            fun_fact=str(entry.get('FunFact', '')),
            reason=str(entry.get('Reason', '')),
        )
    return facts
