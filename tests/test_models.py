import unittest

from outbreak.exceptions import DuplicateHost, EmptyRoster, HostNotFound
from outbreak.models import EligibilityPolicy, Host, Outcome, OutcomeKind, Phase, Roster, Stats, Virus


class TestHost(unittest.TestCase):
    def test_initialization(self):
        """Test basic host initialization."""
        host = Host('Elk', 4, 0.35, contacts=['Bison'], metadata={'Location': 'Mammoth'})
        self.assertEqual(host.name, 'Elk')
        self.assertEqual(host.level, 4)
        self.assertEqual(host.infection_rate, 0.35)
        self.assertFalse(host.is_infected)
        self.assertFalse(host.is_red_herring)
        self.assertEqual(host.contacts, ['Bison'])
        self.assertEqual(host.metadata['Location'], 'Mammoth')
        self.assertEqual(host.image_path, 'png/Elk.png')

    def test_infection_is_one_way(self):
        """Test that infect() sets the flag and nothing can clear it."""
        host = Host('Elk', 4, 0.35)
        host.infect()
        self.assertTrue(host.is_infected)
        host.infect()
        self.assertTrue(host.is_infected)
        with self.assertRaises(AttributeError):
            host.is_infected = False

    def test_red_herring_cannot_be_infected(self):
        host = Host('Swan', 3, 0.3, is_red_herring=True)
        with self.assertRaises(RuntimeError):
            host.infect()
        self.assertFalse(host.is_infected)
        with self.assertRaises(ValueError):
            Host('Swan', 3, 0.3, is_red_herring=True, is_infected=True)

    def test_validation(self):
        """Test that malformed hosts are rejected."""
        with self.assertRaises(ValueError):
            Host('', 1, 0.5)
        with self.assertRaises(ValueError):
            Host('Elk', 0, 0.5)
        with self.assertRaises(ValueError):
            Host('Elk', 1.5, 0.5)
        with self.assertRaises(ValueError):
            Host('Elk', True, 0.5)
        with self.assertRaises(ValueError):
            Host('Elk', 1, 1.5)
        with self.assertRaises(ValueError):
            Host('Elk', 1, -0.1)
        with self.assertRaises(ValueError):
            Host('Elk', 1, '0.5')


class TestRoster(unittest.TestCase):
    def setUp(self):
        self.roster = Roster([Host('Mosquito', 1, 0.8), Host('Mouse', 2, 0.6), Host('Wolf', 5, 0.2)])

    def test_lookup(self):
        self.assertEqual(self.roster.get('Mouse').level, 2)
        self.assertIn('Wolf', self.roster)
        self.assertNotIn('Moose', self.roster)
        self.assertEqual(len(self.roster), 3)
        self.assertEqual(self.roster.names(), ['Mosquito', 'Mouse', 'Wolf'])

    def test_missing_host(self):
        with self.assertRaises(HostNotFound) as ctx:
            self.roster.get('Moose')
        self.assertEqual(ctx.exception.name, 'Moose')
        # Also usable as a KeyError
        self.assertIsInstance(ctx.exception, KeyError)

    def test_apex_level(self):
        self.assertEqual(self.roster.apex_level, 5)

    def test_infect_mutates_shared_host(self):
        """Test that the roster hands out its own hosts, not copies."""
        mouse = self.roster.get('Mouse')
        self.roster.infect('Mouse')
        self.assertTrue(mouse.is_infected)
        self.assertEqual([h.name for h in self.roster.infected()], ['Mouse'])

    def test_duplicate_names(self):
        with self.assertRaises(DuplicateHost):
            Roster([Host('Elk', 4, 0.3), Host('Elk', 3, 0.3)])

    def test_empty(self):
        with self.assertRaises(EmptyRoster):
            Roster([])


class TestStats(unittest.TestCase):
    def test_elapsed(self):
        stats = Stats()
        self.assertEqual(stats.elapsed(500.0), 0.0)
        stats.start_time = 100.0
        self.assertEqual(stats.elapsed(112.5), 12.5)

    def test_copy_is_independent(self):
        stats = Stats()
        stats.attempts = 3
        copy = stats.copy()
        stats.attempts += 1
        self.assertEqual(copy.attempts, 3)


class TestValueTypes(unittest.TestCase):
    def test_virus(self):
        virus = Virus()
        self.assertEqual(virus.strength, 1.0)
        self.assertEqual(virus.modes, ['Bite'])
        with self.assertRaises(ValueError):
            Virus(-0.5)
        with self.assertRaises(ValueError):
            Virus(float('nan'))

    def test_policy_parse(self):
        self.assertIs(EligibilityPolicy.parse('contact_graph'), EligibilityPolicy.CONTACT_GRAPH)
        self.assertIs(EligibilityPolicy.parse('LEVEL_ADJACENCY'), EligibilityPolicy.LEVEL_ADJACENCY)
        self.assertIs(EligibilityPolicy.parse('Contact-Graph'), EligibilityPolicy.CONTACT_GRAPH)
        self.assertIs(EligibilityPolicy.parse(EligibilityPolicy.CONTACT_GRAPH), EligibilityPolicy.CONTACT_GRAPH)
        with self.assertRaises(ValueError):
            EligibilityPolicy.parse('random')

    def test_phase_terminal(self):
        self.assertFalse(Phase.SELECTING_STARTER.is_terminal)
        self.assertFalse(Phase.PLAYING.is_terminal)
        self.assertTrue(Phase.WON.is_terminal)
        self.assertTrue(Phase.EXHAUSTED.is_terminal)

    def test_outcome(self):
        outcome = Outcome(OutcomeKind.SUCCESS, 'Elk', chance=0.4)
        self.assertTrue(outcome.is_success)
        self.assertFalse(outcome.won)
        self.assertIsNone(outcome.new_level)


if __name__ == '__main__':
    unittest.main()
