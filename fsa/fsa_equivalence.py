from typing import Dict, Optional

from .fsa_components import State
from .fsa_transformations import canonic_numbering


def find_state_mapping(fsa1, fsa2) -> Optional[Dict[State, State]]:
    """
    Find a bijective mapping between the reachable states of two machines if they are isomorphic.

    When the canonic forms of the two machines are identical, the states that
    received the same canonic id correspond to each other.

    Args:
        fsa1: First machine
        fsa2: Second machine

    Returns:
        A dictionary mapping states from fsa1 to fsa2, or None if no mapping exists
    """
    if not are_structurally_equivalent(fsa1, fsa2):
        return None

    by_canonic_id = {canonic: state for state, canonic in canonic_numbering(fsa2).items()}
    return {state: by_canonic_id[canonic] for state, canonic in canonic_numbering(fsa1).items()}


def are_structurally_equivalent(fsa1, fsa2) -> bool:
    """
    Check if two machines are identical up to state renaming.

    Only reachable states count. This does not compare languages: two
    machines recognising the same language with different graphs are not
    structurally equivalent.
    """
    return fsa1.to_canonic_form().encode() == fsa2.to_canonic_form().encode()
