import sys
from typing import FrozenSet, Iterable, Optional, TextIO, Union

from . import fsa_properties, fsa_simulation, fsa_transformations
from .exceptions import InvalidStateError
from .fsa_components import Alphabet, State
from .fsa_encoding import MachineParts, encode_machine, parse_machine, pretty_print_machine
from .fsa_transitions import DeterministicTransitionRelation, TransitionRelation


def _as_state(state: Union[State, int]) -> State:
    return state if isinstance(state, State) else State(state)


class NDFSM:
    """
    Nondeterministic finite state machine.

    A machine is an immutable value: states, an alphabet, a transition
    relation (which may use epsilon and may send one (state, symbol) pair to
    several states), an initial state and a set of accepting states. It is
    built either from its text encoding with :meth:`parse` or from its
    components, and is validated once, at construction. Every transformation
    returns a new machine.
    """

    relation_class = TransitionRelation

    def __init__(self, states, alphabet, transitions, initial_state, accepting_states=()):
        """
        Build a machine from its components.

        Args:
            states: the states of the machine (State objects or ints)
            alphabet: an Alphabet, or an iterable of one-character symbols
            transitions: a TransitionRelation or an iterable of Transition
            initial_state: the initial state, a member of ``states``
            accepting_states: a subset of ``states``

        Raises:
            FormatError: if the alphabet or a state id is malformed
            InvalidStateError: if the initial or an accepting state is not in ``states``
            InvalidTransitionError: if a transition uses an unknown state or symbol
            NotDeterministicError: if a deterministic machine gets epsilon
                moves or several destinations for one (state, symbol) pair
        """
        self._states: FrozenSet[State] = frozenset(_as_state(s) for s in states)
        self._alphabet = alphabet if isinstance(alphabet, Alphabet) else Alphabet(alphabet)

        if isinstance(transitions, TransitionRelation):
            transitions = transitions.transitions()
        self._transitions = self.relation_class(transitions)

        self._initial_state = _as_state(initial_state)
        self._accepting_states: FrozenSet[State] = frozenset(_as_state(s) for s in accepting_states)

        if self._initial_state not in self._states:
            raise InvalidStateError(f"Initial state {self._initial_state} is not one of the machine's states")

        unknown = self._accepting_states - self._states
        if unknown:
            raise InvalidStateError(
                f"Accepting states {', '.join(str(s) for s in sorted(unknown))} are not states of the machine")

        self._transitions.verify(self._states, self._alphabet)

    @classmethod
    def parse(cls, encoding: str):
        """
        Builds a machine from its text encoding, e.g.
        ``0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1``.

        Raises:
            FormatError: if the encoding is malformed
            InvalidStateError, InvalidTransitionError, NotDeterministicError:
                if the decoded parts do not form a valid machine
        """
        return cls._create(parse_machine(encoding))

    @classmethod
    def _create(cls, parts: MachineParts):
        return cls(*parts)

    @property
    def states(self) -> FrozenSet[State]:
        return self._states

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def transitions(self) -> TransitionRelation:
        return self._transitions

    @property
    def initial_state(self) -> State:
        return self._initial_state

    @property
    def accepting_states(self) -> FrozenSet[State]:
        return self._accepting_states

    def encode(self) -> str:
        return encode_machine(self)

    def pretty_print(self, out: Optional[TextIO] = None) -> None:
        pretty_print_machine(self, out if out is not None else sys.stdout)

    def epsilon_closure(self, state: Union[State, int]) -> FrozenSet[State]:
        return fsa_properties.epsilon_closure(self, _as_state(state))

    def epsilon_closure_of(self, states: Iterable[Union[State, int]]) -> FrozenSet[State]:
        return fsa_properties.epsilon_closure_of(self, (_as_state(s) for s in states))

    def reachable_states(self) -> FrozenSet[State]:
        return fsa_properties.reachable_states(self)

    def remove_unreachable_states(self):
        """Returns a machine of the same type recognising the same language, without unreachable states."""
        return self._create(fsa_transformations.remove_unreachable_states(self))

    def to_canonic_form(self):
        """
        Returns a canonic version of this machine.

        Two machines whose reachable parts have the same shape encode
        identically once in canonic form, whatever ids they started with,
        provided no (state, symbol) pair has several destinations. Such
        destinations are numbered in ascending id order, so the canonic form
        of a machine that has them can still depend on its ids.
        """
        return self._create(fsa_transformations.to_canonic_form(self))

    def to_dfsm(self) -> 'DFSM':
        """Subset construction: returns a DFSM recognising the same language."""
        return DFSM._create(fsa_transformations.nfa_to_dfa(self))

    def compute(self, input_string: Iterable[str]) -> bool:
        """
        Runs the machine on ``input_string``, following every branch at once.

        No DFSM is built, so the cost stays linear in the input whatever the
        size of the subset construction. A symbol outside the alphabet rejects.
        """
        return fsa_simulation.simulate_nondeterministic_fsa(self, input_string)

    def __eq__(self, other):
        if not isinstance(other, NDFSM):
            return NotImplemented
        return self.encode() == other.encode()

    def __hash__(self):
        return hash(self.encode())

    def __str__(self):
        return self.encode()

    def __repr__(self):
        return f"{self.__class__.__name__}({self.encode()!r})"


class DFSM(NDFSM):
    """
    Deterministic finite state machine.

    No epsilon moves and at most one destination per (state, symbol) pair.
    A missing transition leads to an implicit, rejecting dead state.
    """

    relation_class = DeterministicTransitionRelation

    def to_dfsm(self) -> 'DFSM':
        return self

    def compute(self, input_string: Iterable[str]) -> bool:
        """
        Runs the machine on ``input_string``.

        Never raises: a symbol without a transition, including one outside
        the alphabet, rejects the input.
        """
        return fsa_simulation.compute(self, input_string)


def convert(encoding: str) -> str:
    """Parses an NDFSM encoding and returns the encoding of the equivalent DFSM."""
    return NDFSM.parse(encoding).to_dfsm().encode()


def compute(encoding: str, input_string: Iterable[str]) -> bool:
    """Parses a DFSM encoding and runs it on ``input_string``."""
    return DFSM.parse(encoding).compute(input_string)
