from .exceptions import (
    FSAError,
    FormatError,
    InvalidStateError,
    InvalidTransitionError,
    NotDeterministicError,
)
from .fsa_components import EPSILON, Alphabet, State, Transition
from .fsa_transitions import DeterministicTransitionRelation, TransitionRelation
from .fsa_machines import DFSM, NDFSM, compute, convert

__all__ = [
    'EPSILON',
    'Alphabet',
    'State',
    'Transition',
    'TransitionRelation',
    'DeterministicTransitionRelation',
    'NDFSM',
    'DFSM',
    'convert',
    'compute',
    'FSAError',
    'FormatError',
    'InvalidStateError',
    'InvalidTransitionError',
    'NotDeterministicError',
]
