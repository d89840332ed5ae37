from itertools import product
from django.test import TestCase
from fsa import DFSM, NDFSM, convert
from fsa.fsa_components import State
from fsa.fsa_properties import is_complete, is_deterministic
from fsa.fsa_simulation import simulate_nondeterministic_fsa


NFA_WITH_EPSILON = "0 1 2 3/a b/2,a,0;0,,1;1,a,1;1,a,2;1,b,2;2,a,2;2,b,3;3,b,1/0/0"

EXPECTED_DFA = ("0 1 2 3 4 5 6 7 8/a b/0,a,1;0,b,2;1,a,3;1,b,7;2,a,3;2,b,4;3,a,3;3,b,7;"
                "4,a,5;4,b,6;5,a,5;5,b,5;6,a,1;6,b,2;7,a,3;7,b,8;8,a,1;8,b,1/0/0 3")


def all_strings(alphabet, max_length):
    for length in range(max_length + 1):
        for letters in product(alphabet, repeat=length):
            yield ''.join(letters)


class TestNfaToDfa(TestCase):
    """Test cases for NFA to DFA conversion"""

    def assertSameLanguage(self, nfa, dfa, max_length=7):
        for test_string in all_strings(list(nfa.alphabet), max_length):
            self.assertEqual(simulate_nondeterministic_fsa(nfa, test_string), dfa.compute(test_string),
                             f"Disagreement on string '{test_string}'")

    def test_conversion_matches_reference_dfa(self):
        """The converted NFA has the same canonic form as the reference DFA"""
        nfa = NDFSM.parse(NFA_WITH_EPSILON)
        reference = DFSM.parse(EXPECTED_DFA)

        converted = nfa.to_dfsm().to_canonic_form()

        self.assertEqual(converted.encode(), reference.to_canonic_form().encode())
        self.assertEqual(converted.encode(), EXPECTED_DFA)

    def test_subsets_are_numbered_in_discovery_order(self):
        dfa = NDFSM.parse(NFA_WITH_EPSILON).to_dfsm()
        self.assertEqual(dfa.encode(), (
            "0 1 2 3 4 5 6 7 8/a b/0,a,1;0,b,2;1,a,3;1,b,4;2,a,3;2,b,5;3,a,3;3,b,4;"
            "4,a,3;4,b,6;5,a,7;5,b,8;6,a,1;6,b,1;7,a,7;7,b,7;8,a,1;8,b,2/0/0 3"))

    def test_result_is_a_complete_dfsm(self):
        dfa = NDFSM.parse(NFA_WITH_EPSILON).to_dfsm()
        self.assertIsInstance(dfa, DFSM)
        self.assertTrue(is_deterministic(dfa))
        self.assertTrue(is_complete(dfa))
        self.assertEqual(dfa.initial_state, State(0))
        self.assertEqual(dfa.alphabet, NDFSM.parse(NFA_WITH_EPSILON).alphabet)

    def test_language_is_preserved(self):
        nfa = NDFSM.parse(NFA_WITH_EPSILON)
        self.assertSameLanguage(nfa, nfa.to_dfsm())

    def test_simple_nfa_conversion(self):
        """Strings ending with 'ab', non-deterministic on 'a'"""
        nfa = NDFSM.parse("0 1 2/a b/0,a,0;0,a,1;0,b,0;1,b,2/0/2")
        dfa = nfa.to_dfsm()

        self.assertTrue(dfa.compute('aab'))
        self.assertTrue(dfa.compute('bab'))
        self.assertFalse(dfa.compute('aba'))
        self.assertFalse(dfa.compute(''))
        self.assertSameLanguage(nfa, dfa)

    def test_nfa_with_epsilon_loops(self):
        nfa = NDFSM.parse("0 1 2/a/0,,1;1,,1;1,a,2/0/2")
        dfa = nfa.to_dfsm()

        self.assertTrue(dfa.compute('a'))
        self.assertFalse(dfa.compute('aa'))
        self.assertSameLanguage(nfa, dfa)

    def test_epsilon_reaches_accepting_initial_state(self):
        """An accepting state in the closure of the initial state accepts the empty string"""
        nfa = NDFSM.parse("0 1/a/0,,1/0/1")
        self.assertTrue(nfa.compute(''))
        self.assertFalse(nfa.compute('a'))

    def test_dead_state_is_shared_and_rejecting(self):
        nfa = NDFSM.parse("0 1/a b/0,a,1/0/1")
        dfa = nfa.to_dfsm()

        self.assertEqual(dfa.encode(), "0 1 2/a b/0,a,1;0,b,2;1,a,2;1,b,2;2,a,2;2,b,2/0/1")
        dead = State(2)
        self.assertNotIn(dead, dfa.accepting_states)
        for symbol in dfa.alphabet:
            self.assertEqual(dfa.transitions.destination(dead, symbol), dead)

    def test_no_accepting_states(self):
        dfa = NDFSM.parse("0 1/a/0,a,1;1,,0/0/").to_dfsm()
        self.assertEqual(dfa.accepting_states, frozenset())

    def test_already_deterministic_nfa(self):
        """Even number of 'a's"""
        nfa = NDFSM.parse("0 1/a b/0,a,1;0,b,0;1,a,0;1,b,1/0/0")
        dfa = nfa.to_dfsm()

        self.assertEqual(dfa.encode(), nfa.encode())
        self.assertSameLanguage(nfa, dfa)

    def test_conversion_does_not_change_the_nfa(self):
        nfa = NDFSM.parse(NFA_WITH_EPSILON)
        before = nfa.encode()
        nfa.to_dfsm()
        self.assertEqual(nfa.encode(), before)

    def test_dfsm_to_dfsm_is_itself(self):
        dfa = DFSM.parse("0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1")
        self.assertIs(dfa.to_dfsm(), dfa)

    def test_convert_encoding(self):
        self.assertEqual(convert("0 1/a b/0,a,1/0/1"), "0 1 2/a b/0,a,1;0,b,2;1,a,2;1,b,2;2,a,2;2,b,2/0/1")
