from typing import Dict, FrozenSet, Iterable, Set
from collections import deque

from .fsa_components import EPSILON, State


def epsilon_closure(fsa, state: State) -> FrozenSet[State]:
    """
    Computes the epsilon closure of a single state.

    The closure is every state reachable from ``state`` through zero or more
    epsilon transitions, so it always contains ``state`` itself.

    Args:
        fsa: A machine (NDFSM or DFSM)
        state: The state to start from

    Returns:
        FrozenSet[State]: The epsilon closure of ``state``
    """
    closure = {state}
    worklist = [state]

    while worklist:
        current = worklist.pop()
        for target in fsa.transitions.at(current, EPSILON):
            if target not in closure:
                closure.add(target)
                worklist.append(target)

    return frozenset(closure)


def epsilon_closure_of(fsa, states: Iterable[State]) -> FrozenSet[State]:
    """Union of the epsilon closures of ``states``."""
    closure: Set[State] = set()
    for state in states:
        if state not in closure:
            closure |= epsilon_closure(fsa, state)
    return frozenset(closure)


def reachable_states(fsa) -> FrozenSet[State]:
    """
    Finds all states reachable from the starting state.

    Every symbol of the alphabet is followed, epsilon included.

    Args:
        fsa: A machine (NDFSM or DFSM)

    Returns:
        FrozenSet[State]: The reachable states, the initial state included
    """
    symbols = fsa.alphabet.with_epsilon()

    reachable = {fsa.initial_state}
    queue = deque([fsa.initial_state])

    while queue:
        current_state = queue.popleft()
        for symbol in symbols:
            for next_state in fsa.transitions.at(current_state, symbol):
                if next_state not in reachable:
                    reachable.add(next_state)
                    queue.append(next_state)

    return frozenset(reachable)


def is_deterministic(fsa) -> bool:
    """
    Checks if the FSA is deterministic.

    An FSA is deterministic if:
    1. It has no epsilon transitions
    2. For each state and each symbol, there is at most one transition

    Args:
        fsa: A machine (NDFSM or DFSM)

    Returns:
        bool: True if the FSA is deterministic, False otherwise
    """
    for state in fsa.states:
        if fsa.transitions.at(state, EPSILON):
            return False

        for symbol in fsa.alphabet:
            if len(fsa.transitions.at(state, symbol)) > 1:
                return False

    return True


def is_complete(fsa) -> bool:
    """
    Checks if the FSA is complete.

    An FSA is complete if for each state and each symbol, there is at least one transition.
    Epsilon transitions are ignored for completeness check.

    Args:
        fsa: A machine (NDFSM or DFSM)

    Returns:
        bool: True if the FSA is complete, False otherwise
    """
    return all(
        fsa.transitions.at(state, symbol)
        for state in fsa.states
        for symbol in fsa.alphabet
    )


def is_connected(fsa) -> bool:
    """
    Checks if the FSA is connected.

    An FSA is connected if all states are reachable from the starting state.
    """
    return len(reachable_states(fsa)) == len(fsa.states)


def check_all_properties(fsa) -> Dict[str, bool]:
    """
    Check all FSA properties at once.

    Args:
        fsa: A machine (NDFSM or DFSM)

    Returns:
        Dict: Dictionary containing all property check results:
        {
            'deterministic': bool,
            'complete': bool,
            'connected': bool
        }
    """
    return {
        'deterministic': is_deterministic(fsa),
        'complete': is_complete(fsa),
        'connected': is_connected(fsa)
    }
