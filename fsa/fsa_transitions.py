from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Set, Tuple

from .exceptions import InvalidTransitionError, NotDeterministicError
from .fsa_components import EPSILON, Alphabet, State, Transition

NO_STATES: FrozenSet[State] = frozenset()


class TransitionRelation:
    """
    All transitions of a machine, indexed by (state, symbol).

    Lookups are nondeterministic: a pair may lead to any number of states,
    including none, which stands for the implicit dead state.
    """

    def __init__(self, transitions: Iterable[Transition]):
        self._transitions: FrozenSet[Transition] = frozenset(transitions)

        index: Dict[Tuple[State, str], Set[State]] = defaultdict(set)
        for transition in self._transitions:
            index[(transition.from_state, transition.symbol)].add(transition.to_state)

        self._index: Dict[Tuple[State, str], FrozenSet[State]] = {
            key: frozenset(targets) for key, targets in index.items()
        }

    def at(self, state: State, symbol: str) -> FrozenSet[State]:
        """Returns every destination of (state, symbol), or an empty set."""
        return self._index.get((state, symbol), NO_STATES)

    def transitions(self) -> FrozenSet[Transition]:
        return self._transitions

    def verify(self, states: Iterable[State], alphabet: Alphabet) -> None:
        """
        Checks that every transition only uses declared states and symbols.

        Args:
            states: the machine's states
            alphabet: the machine's alphabet

        Raises:
            InvalidTransitionError: on the first offending transition, in
                encoding order
        """
        states = set(states)
        for transition in self.sorted():
            if transition.from_state not in states:
                raise InvalidTransitionError(
                    f"Transition {transition.encode()} starts from unknown state {transition.from_state}")
            if transition.to_state not in states:
                raise InvalidTransitionError(
                    f"Transition {transition.encode()} leads to unknown state {transition.to_state}")
            if transition.symbol != EPSILON and transition.symbol not in alphabet:
                raise InvalidTransitionError(
                    f"Transition {transition.encode()} uses symbol '{transition.symbol}' "
                    f"which is not in the alphabet")

    def sorted(self):
        return sorted(self._transitions, key=Transition.sort_key)

    def encode(self) -> str:
        return ';'.join(transition.encode() for transition in self.sorted())

    def pretty_name(self) -> str:
        return 'Δ'

    def pretty_print(self) -> str:
        return '{' + ', '.join(transition.pretty_print() for transition in self.sorted()) + '}'

    def __iter__(self) -> Iterator[Transition]:
        return iter(self.sorted())

    def __len__(self) -> int:
        return len(self._transitions)


class DeterministicTransitionRelation(TransitionRelation):
    """A transition relation with no epsilon moves and at most one destination per (state, symbol)."""

    def __init__(self, transitions: Iterable[Transition]):
        super().__init__(transitions)

        for transition in self.sorted():
            if transition.symbol == EPSILON:
                raise NotDeterministicError(
                    f"Epsilon transition {transition.encode()} in a deterministic machine")

        for (state, symbol), targets in self._index.items():
            if len(targets) > 1:
                destinations = ', '.join(str(target) for target in sorted(targets))
                raise NotDeterministicError(
                    f"State {state} has several destinations on '{symbol}': {destinations}")

    def destination(self, state: State, symbol: str) -> Optional[State]:
        """Returns the unique destination of (state, symbol), or None for the dead state."""
        for target in self.at(state, symbol):
            return target
        return None

    def pretty_name(self) -> str:
        return 'δ'
