from typing import Dict, FrozenSet, Iterable, List, Tuple, Union

from .fsa_components import State
from .fsa_properties import epsilon_closure, epsilon_closure_of


def simulate_deterministic_fsa(fsa, input_string: Iterable[str]) -> Union[List[Tuple[State, str, State]], Dict]:
    """
    Simulates a deterministic FSA with the given input string.

    Args:
        fsa: A DFSM
        input_string: The input string (or any sequence of symbols) to simulate

    Returns:
        If the input is accepted, returns a list of transitions in the format:
        [(current_state, symbol, next_state), ...].
        If the input is rejected, returns a dictionary with:
        {
            'accepted': False,
            'path': [(current_state, symbol, next_state), ...],  # Path up to rejection
            'rejection_reason': str,  # Why rejected
            'rejection_position': int  # Position where rejection occurred
        }
    """
    current_state = fsa.initial_state
    execution_path = []

    for position, symbol in enumerate(input_string):
        if symbol not in fsa.alphabet:
            return {
                'accepted': False,
                'path': execution_path,
                'rejection_reason': f"Symbol '{symbol}' not in alphabet",
                'rejection_position': position
            }

        next_state = fsa.transitions.destination(current_state, symbol)

        # No transition means the implicit dead state
        if next_state is None:
            return {
                'accepted': False,
                'path': execution_path,
                'rejection_reason': f"No transition defined for symbol '{symbol}' from state '{current_state}'",
                'rejection_position': position
            }

        execution_path.append((current_state, symbol, next_state))
        current_state = next_state

    if current_state in fsa.accepting_states:
        return execution_path

    return {
        'accepted': False,
        'path': execution_path,
        'rejection_reason': f"Final state '{current_state}' is not an accepting state",
        'rejection_position': len(execution_path)
    }


def compute(fsa, input_string: Iterable[str]) -> bool:
    """Replays ``input_string`` through a DFSM and tells whether it ends in an accepting state."""
    current_state = fsa.initial_state
    for symbol in input_string:
        current_state = fsa.transitions.destination(current_state, symbol)
        if current_state is None:
            return False
    return current_state in fsa.accepting_states


def run_nondeterministic_fsa(fsa, input_string: Iterable[str]) -> FrozenSet[State]:
    """
    Returns every state a nondeterministic machine can be in after reading ``input_string``.

    The set is epsilon closed after each symbol; it is empty once no branch survives.
    """
    current_states = epsilon_closure(fsa, fsa.initial_state)

    for symbol in input_string:
        # Epsilon and unknown symbols have no transition to consume
        if symbol not in fsa.alphabet:
            return frozenset()
        next_states = set()
        for state in current_states:
            next_states |= fsa.transitions.at(state, symbol)
        current_states = epsilon_closure_of(fsa, next_states)
        if not current_states:
            break

    return current_states


def simulate_nondeterministic_fsa(fsa, input_string: Iterable[str]) -> bool:
    """
    Simulates a non-deterministic FSA without building a DFA first.

    All branches are followed at once, so the result is the answer of
    :func:`compute` on the subset construction of ``fsa``.
    """
    return bool(run_nondeterministic_fsa(fsa, input_string) & fsa.accepting_states)
