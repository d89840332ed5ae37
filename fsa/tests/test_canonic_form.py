from itertools import product
from django.test import TestCase
from fsa import DFSM, NDFSM


def all_strings(alphabet, max_length):
    for length in range(max_length + 1):
        for letters in product(alphabet, repeat=length):
            yield ''.join(letters)


class TestCanonicForm(TestCase):
    """Test cases for canonic renumbering"""

    def test_isomorphic_machines_share_a_canonic_form(self):
        first = DFSM.parse("0 1 2/a b/0,a,1;1,b,2;2,a,0/0/2")
        renamed = DFSM.parse("3 5 7/a b/7,a,3;3,b,5;5,a,7/7/5")

        self.assertEqual(first.to_canonic_form().encode(), "0 1 2/a b/0,a,1;1,b,2;2,a,0/0/2")
        self.assertEqual(first.to_canonic_form().encode(), renamed.to_canonic_form().encode())

    def test_isomorphic_nfas_share_a_canonic_form(self):
        first = NDFSM.parse("0 1 2 3/a b/0,,1;0,a,2;1,b,3;2,,3;3,a,0/0/3")
        renamed = NDFSM.parse("40 41 42 43/a b/42,,40;42,a,43;40,b,41;43,,41;41,a,42/42/41")

        self.assertEqual(first.to_canonic_form().encode(), renamed.to_canonic_form().encode())

    def test_initial_state_becomes_zero(self):
        dfa = DFSM.parse("5 9/a/5,a,9;9,a,5/9/5")
        self.assertEqual(dfa.to_canonic_form().encode(), "0 1/a/0,a,1;1,a,0/0/1")

    def test_epsilon_is_followed_first(self):
        nfa = NDFSM.parse("0 1 2/a/0,a,1;0,,2/0/1")
        self.assertEqual(nfa.to_canonic_form().encode(), "0 1 2/a/0,,1;0,a,2/0/2")

    def test_traversal_is_depth_first(self):
        """The last discovered state is expanded first"""
        nfa = NDFSM.parse("0 1 2 3 4/a b/0,a,1;0,b,2;1,a,3;2,a,4/0/")
        self.assertEqual(nfa.to_canonic_form().encode(), "0 1 2 3 4/a b/0,a,1;0,b,2;1,a,4;2,a,3/0/")

    def test_unreachable_accepting_states_are_dropped(self):
        nfa = NDFSM.parse("0 1 2/a/0,a,0;1,a,2/0/0 2")
        self.assertEqual(nfa.to_canonic_form().encode(), "0/a/0,a,0/0/0")

    def test_canonic_form_is_stable(self):
        dfa = DFSM.parse("4 2 9/a b/4,a,2;4,b,9;2,a,2;2,b,4;9,a,9;9,b,9/4/2")
        once = dfa.to_canonic_form()
        self.assertEqual(once.to_canonic_form().encode(), once.encode())

    def test_canonic_form_keeps_the_machine_type(self):
        self.assertIsInstance(DFSM.parse("0/a/0,a,0/0/0").to_canonic_form(), DFSM)
        self.assertNotIsInstance(NDFSM.parse("0/a/0,,0/0/0").to_canonic_form(), DFSM)

    def test_parallel_destinations_are_numbered_by_id(self):
        """Several destinations of one pair keep their id order, so isomorphic NFAs can differ"""
        looping_first = NDFSM.parse("0 1 2/a/0,a,1;0,a,2;1,a,1/0/")
        looping_second = NDFSM.parse("0 1 2/a/0,a,1;0,a,2;2,a,2/0/")

        self.assertEqual(looping_first.to_canonic_form().encode(), "0 1 2/a/0,a,1;0,a,2;1,a,1/0/")
        self.assertEqual(looping_second.to_canonic_form().encode(), "0 1 2/a/0,a,1;0,a,2;2,a,2/0/")

        # Their subset constructions have no such pairs and do agree
        self.assertEqual(
            looping_first.to_dfsm().to_canonic_form().encode(),
            looping_second.to_dfsm().to_canonic_form().encode())

    def test_subset_construction_ignores_nfa_ids(self):
        nfa = NDFSM.parse("0 1 2 3/a b/2,a,0;0,,1;1,a,1;1,a,2;1,b,2;2,a,2;2,b,3;3,b,1/0/0")
        renamed = NDFSM.parse("10 11 12 13/a b/12,a,10;10,,11;11,a,11;11,a,12;11,b,12;12,a,12;12,b,13;13,b,11/10/10")

        self.assertEqual(nfa.to_dfsm().encode(), renamed.to_dfsm().encode())

    def test_same_language_different_graph_is_not_merged(self):
        """Canonic form is not minimisation"""
        one_state = DFSM.parse("0/a/0,a,0/0/0")
        two_states = DFSM.parse("0 1/a/0,a,1;1,a,0/0/0 1")

        for test_string in all_strings(['a'], 5):
            self.assertEqual(one_state.compute(test_string), two_states.compute(test_string))
        self.assertNotEqual(one_state.to_canonic_form().encode(), two_states.to_canonic_form().encode())


class TestRemoveUnreachableStates(TestCase):
    """Test cases for reachability pruning"""

    def test_remove_unreachable_states(self):
        nfa = NDFSM.parse("0 1 2 3/a b/0,a,1;1,,2;3,b,0/0/2 3")
        pruned = nfa.remove_unreachable_states()

        self.assertEqual(pruned.encode(), "0 1 2/a b/0,a,1;1,,2/0/2")

    def test_initial_state_is_kept(self):
        dfa = DFSM.parse("3 4/a/4,a,3/3/4")
        self.assertEqual(dfa.remove_unreachable_states().encode(), "3/a//3/")

    def test_pruning_preserves_language(self):
        machines = [
            NDFSM.parse("0 1 2 3/a b/0,a,1;1,,2;2,b,0;3,b,0;3,a,3/0/2 3"),
            NDFSM.parse("0 1 2 3 4/a b/0,,1;1,a,1;1,b,2;4,a,0;3,,0/0/2 4"),
        ]
        for machine in machines:
            pruned = machine.remove_unreachable_states()
            for test_string in all_strings(['a', 'b'], 6):
                self.assertEqual(machine.compute(test_string), pruned.compute(test_string),
                                 f"Disagreement on string '{test_string}'")

    def test_pruning_keeps_the_machine_type(self):
        dfa = DFSM.parse("0 1 2/a b/0,a,0;0,b,1;1,a,1;2,a,0/0/1 2")
        pruned = dfa.remove_unreachable_states()

        self.assertIsInstance(pruned, DFSM)
        self.assertEqual(pruned.encode(), "0 1/a b/0,a,0;0,b,1;1,a,1/0/1")

    def test_pruning_returns_a_new_machine(self):
        nfa = NDFSM.parse("0 1/a/1,a,0/0/1")
        pruned = nfa.remove_unreachable_states()

        self.assertIsNot(pruned, nfa)
        self.assertEqual(nfa.encode(), "0 1/a/1,a,0/0/1")
        self.assertEqual(pruned.encode(), "0/a//0/")
