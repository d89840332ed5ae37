import logging
from typing import Dict, FrozenSet, Set
from collections import deque

from .fsa_components import State, Transition
from .fsa_encoding import MachineParts
from .fsa_properties import epsilon_closure, epsilon_closure_of, reachable_states

logger = logging.getLogger(__name__)

# The transformations below are pure: they read a machine and return the parts
# of a new one. The machine classes wrap the parts into an instance of the
# right type (see fsa_machines).


def remove_unreachable_states(fsa) -> MachineParts:
    """
    Remove states that are unreachable from the start state.

    Args:
        fsa: A machine (NDFSM or DFSM)

    Returns:
        MachineParts: The same machine restricted to its reachable states.
        The initial state is unchanged and the language is preserved.
    """
    reachable = reachable_states(fsa)

    new_transitions = {
        t for t in fsa.transitions.transitions()
        if t.from_state in reachable and t.to_state in reachable
    }
    new_accepting = {s for s in fsa.accepting_states if s in reachable}

    logger.debug("Removed %d unreachable states", len(fsa.states) - len(reachable))

    return MachineParts(
        states=set(reachable),
        alphabet=fsa.alphabet,
        transitions=new_transitions,
        initial_state=fsa.initial_state,
        accepting_states=new_accepting,
    )


def canonic_numbering(fsa) -> Dict[State, State]:
    """
    Maps every reachable state of ``fsa`` to its id in the canonic form.

    States are numbered from 0 in the order a depth-first traversal from the
    initial state first meets them. Each visited state is expanded on epsilon
    first and then on the alphabet in declaration order; several destinations
    of one (state, symbol) pair are met in ascending id order.
    """
    symbols = fsa.alphabet.with_epsilon()
    numbering = {fsa.initial_state: State(0)}
    todo = [fsa.initial_state]

    while todo:
        top = todo.pop()
        for symbol in symbols:
            for next_state in sorted(fsa.transitions.at(top, symbol)):
                if next_state not in numbering:
                    numbering[next_state] = State(len(numbering))
                    todo.append(next_state)

    return numbering


def to_canonic_form(fsa) -> MachineParts:
    """
    Renumbers the reachable states of a machine in traversal order.

    Machines whose reachable transition graphs are identical up to renaming
    get the same encoding (see :func:`canonic_numbering` for the order), as
    long as every (state, symbol) pair has at most one destination. Several
    destinations of one pair are ordered by their ids, so two isomorphic NFAs
    with such pairs may keep different canonic forms.

    Unreachable states, accepting or not, are dropped.

    This is not minimisation: two machines with the same language but
    different graphs keep different canonic forms.

    Args:
        fsa: A machine (NDFSM or DFSM)

    Returns:
        MachineParts: The renumbered machine
    """
    canonic_states = canonic_numbering(fsa)

    # A transition leaving a reachable state always lands on a reachable one
    canonic_transitions = {
        Transition(canonic_states[t.from_state], t.symbol, canonic_states[t.to_state])
        for t in fsa.transitions.transitions()
        if t.from_state in canonic_states
    }
    canonic_accepting = {
        canonic_states[s] for s in fsa.accepting_states if s in canonic_states
    }

    logger.debug("Canonic form keeps %d of %d states", len(canonic_states), len(fsa.states))

    return MachineParts(
        states=set(canonic_states.values()),
        alphabet=fsa.alphabet,
        transitions=canonic_transitions,
        initial_state=State(0),
        accepting_states=canonic_accepting,
    )


def move(nfa, states: FrozenSet[State], symbol: str) -> FrozenSet[State]:
    """Compute all states reachable from given states on given symbol"""
    result = set()
    for state in states:
        result |= nfa.transitions.at(state, symbol)
    return frozenset(result)


def nfa_to_dfa(nfa) -> MachineParts:
    """
    Converts a non-deterministic finite automaton (NFA) to a deterministic finite automaton (DFA)
    using subset construction algorithm.

    Each DFA state stands for the set of NFA states reachable by the same
    input prefix. Subsets are numbered in the order they are discovered: the
    epsilon closure of the initial state is 0, and a FIFO worklist processes
    subsets symbol by symbol in alphabet order. The empty subset, when it
    shows up, is a single shared dead state that loops on every symbol.

    Args:
        nfa: A machine (NDFSM or DFSM)

    Returns:
        MachineParts: A complete DFA accepting the same language
    """
    start = epsilon_closure(nfa, nfa.initial_state)

    # Frozensets are order independent, so equal subsets always share an id
    dfa_state_map: Dict[FrozenSet[State], State] = {start: State(0)}
    dfa_transitions: Set[Transition] = set()
    dfa_accepting: Set[State] = set()

    queue = deque([start])

    while queue:
        current_nfa_states = queue.popleft()
        current_dfa_state = dfa_state_map[current_nfa_states]

        # Any DFA state that contains an NFA accepting state accepts
        if current_nfa_states & nfa.accepting_states:
            dfa_accepting.add(current_dfa_state)

        for symbol in nfa.alphabet:
            new_state_set = epsilon_closure_of(nfa, move(nfa, current_nfa_states, symbol))

            if new_state_set not in dfa_state_map:
                dfa_state_map[new_state_set] = State(len(dfa_state_map))
                queue.append(new_state_set)

            dfa_transitions.add(
                Transition(current_dfa_state, symbol, dfa_state_map[new_state_set]))

    logger.debug(
        "Subset construction turned %d NFA states into %d DFA states",
        len(nfa.states), len(dfa_state_map))

    return MachineParts(
        states=set(dfa_state_map.values()),
        alphabet=nfa.alphabet,
        transitions=dfa_transitions,
        initial_state=State(0),
        accepting_states=dfa_accepting,
    )
