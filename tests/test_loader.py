import os
import tempfile
import unittest

from helpers import TWO_TIER_FACTS, TWO_TIER_JSON, write_json
from outbreak.config import DATA_DIR
from outbreak.exceptions import DuplicateHost, EmptyRoster, LoadError
from outbreak.loader import build_roster, load_red_herring_facts, load_roster
from outbreak.models import RedHerringFact


class TestLoadRoster(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_grouped_layout(self):
        path = write_json(self.tmp.name, 'animals.json', TWO_TIER_JSON)
        hosts, apex = load_roster(path)
        self.assertEqual([h.name for h in hosts], ['A', 'R', 'B'])
        self.assertEqual(apex, 2)
        self.assertTrue(hosts[1].is_red_herring)
        self.assertEqual(hosts[0].contacts, ['B', 'R'])

    def test_flat_layout_and_metadata(self):
        path = write_json(self.tmp.name, 'animals.json', [
            {'Name': 'Elk', 'Level': 4, 'InfectionRate': 0.35, 'Mobility': 'Running',
             'Intelligence': 5, 'Location': 'Mammoth Hot Springs'},
        ])
        hosts, apex = load_roster(path)
        elk = hosts[0]
        self.assertEqual(apex, 4)
        self.assertEqual(elk.contacts, [])
        self.assertFalse(elk.is_infected)
        self.assertEqual(elk.metadata, {'Mobility': 'Running', 'Intelligence': 5,
                                        'Location': 'Mammoth Hot Springs'})

    def test_missing_file(self):
        with self.assertRaises(LoadError):
            load_roster(os.path.join(self.tmp.name, 'nope.json'))

    def test_invalid_json(self):
        path = write_json(self.tmp.name, 'animals.json', '{"Prey": [')
        with self.assertRaises(LoadError):
            load_roster(path)

    def test_malformed_entries(self):
        bad_payloads = [
            42,
            {'Prey': {'Name': 'A'}},
            {'Prey': ['A']},
            {'Prey': [{'Level': 1}]},
            {'Prey': [{'Name': 'A', 'Level': 0, 'InfectionRate': 0.5}]},
            {'Prey': [{'Name': 'A', 'Level': 1, 'InfectionRate': 2.0}]},
            {'Prey': [{'Name': 'A', 'Level': 1, 'InfectionRate': 0.5, 'Contacts': 'B'}]},
        ]
        for payload in bad_payloads:
            path = write_json(self.tmp.name, 'animals.json', payload)
            with self.assertRaises(LoadError, msg=repr(payload)):
                load_roster(path)

    def test_empty_roster(self):
        path = write_json(self.tmp.name, 'animals.json', {'Prey': []})
        self.assertEqual(load_roster(path), ([], 0))
        with self.assertRaises(EmptyRoster):
            build_roster(path)

    def test_duplicate_names(self):
        path = write_json(self.tmp.name, 'animals.json', {
            'Prey': [{'Name': 'A', 'Level': 1, 'InfectionRate': 0.5}],
            'More': [{'Name': 'A', 'Level': 2, 'InfectionRate': 0.5}],
        })
        with self.assertRaises(DuplicateHost):
            build_roster(path)
        # DuplicateHost is a LoadError
        with self.assertRaises(LoadError):
            build_roster(path)

    def test_shipped_roster(self):
        roster = build_roster(os.path.join(DATA_DIR, 'yellowstone_animals.json'))
        self.assertEqual(roster.apex_level, 5)
        self.assertTrue(any(h.is_red_herring for h in roster))
        for host in roster:
            for name in host.contacts:
                self.assertIn(name, roster, f'{host.name} -> {name}')


class TestLoadFacts(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_load(self):
        path = write_json(self.tmp.name, 'facts.json', TWO_TIER_FACTS)
        facts = load_red_herring_facts(path)
        self.assertEqual(facts, {'R': RedHerringFact('R lives underground.', 'R never meets anyone.')})

    def test_missing_file_is_not_an_error(self):
        with self.assertLogs('outbreak.loader', level='WARNING'):
            facts = load_red_herring_facts(os.path.join(self.tmp.name, 'nope.json'))
        self.assertEqual(facts, {})

    def test_malformed_file_is_ignored(self):
        path = write_json(self.tmp.name, 'facts.json', 'not json')
        self.assertEqual(load_red_herring_facts(path), {})
        path = write_json(self.tmp.name, 'facts.json', ['R'])
        self.assertEqual(load_red_herring_facts(path), {})

    def test_partial_entries(self):
        path = write_json(self.tmp.name, 'facts.json', {'R': {'FunFact': 'Only a fact.'}, 'S': 'oops'})
        facts = load_red_herring_facts(path)
        self.assertEqual(facts, {'R': RedHerringFact('Only a fact.', '')})

    def test_shipped_facts_cover_red_herrings(self):
        roster = build_roster(os.path.join(DATA_DIR, 'yellowstone_animals.json'))
        facts = load_red_herring_facts(os.path.join(DATA_DIR, 'red_herring_facts.json'))
        for host in roster:
            if host.is_red_herring:
                self.assertIn(host.name, facts)


if __name__ == '__main__':
    unittest.main()
