"""Shared builders for the test suite."""

import json
import os

from outbreak.models import Host, Roster


class ScriptedRandom:
    """Random source that replays fixed draws."""
    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.values.pop(0)


class ExplodingRandom:
    """Random source that must never be drawn from."""
    def random(self):
        raise AssertionError('random source was used')


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class TickingClock:
    """Clock that moves forward by `step` seconds on every reading."""
    def __init__(self, now=0.0, step=1.0):
        self.now = now
        self.step = step

    def __call__(self):
        reading = self.now
        self.now += self.step
        return reading


def two_tier_roster(with_red_herring=False):
    """A (level 1) -> B (level 2, apex), both certain to catch the virus."""
    contacts = ['B', 'R'] if with_red_herring else ['B']
    hosts = [
        Host('A', 1, 1.0, contacts=contacts),
        Host('B', 2, 1.0),
    ]
    if with_red_herring:
        hosts.append(Host('R', 1, 1.0, is_red_herring=True))
    return Roster(hosts)


def food_chain_roster():
    """Three tiers with a same-level neighbour and red herrings on both ends."""
    return Roster([
        Host('Mosquito', 1, 0.9, contacts=['Mouse', 'Toad', 'Tick', 'Ghost']),
        Host('Tick', 1, 0.8, contacts=['Mouse']),
        Host('Beetle', 1, 0.7, is_red_herring=True),
        Host('Mouse', 2, 0.5, contacts=['Mosquito', 'Fox', 'Wolf']),
        Host('Toad', 2, 0.5, is_red_herring=True),
        Host('Fox', 3, 0.4, contacts=['Wolf']),
        Host('Wolf', 4, 0.2),
    ])


def write_json(directory, filename, payload):
    path = os.path.join(directory, filename)
    with open(path, 'w', encoding='utf-8') as f:
        if isinstance(payload, str):
            f.write(payload)
        else:
            json.dump(payload, f)
    return path


TWO_TIER_JSON = {
    'Prey': [
        {'Name': 'A', 'Level': 1, 'InfectionRate': 1.0, 'Contacts': ['B', 'R'], 'RedHerring': False},
        {'Name': 'R', 'Level': 1, 'InfectionRate': 1.0, 'Contacts': [], 'RedHerring': True},
    ],
    'Apex': [
        {'Name': 'B', 'Level': 2, 'InfectionRate': 1.0, 'Contacts': ['A'], 'RedHerring': False},
    ],
}

TWO_TIER_FACTS = {
    'R': {'FunFact': 'R lives underground.', 'Reason': 'R never meets anyone.'},
}
