"""
Text encoding of whole machines.

A machine is written as five ``/`` separated fields::

    <states> / <alphabet> / <transitions> / <initial state> / <accepting states>

for instance ``0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1``. Transitions are
``from,symbol,to`` triples joined by ``;``; an empty symbol is an epsilon
move. The accepting field may be empty or left out entirely. Whitespace
around separators is ignored.
"""
from typing import List, NamedTuple, Set, TextIO

from .exceptions import FormatError
from .fsa_components import (
    EPSILON,
    Alphabet,
    State,
    Transition,
    encode_state_set,
    parse_state_list,
    pretty_print_state_set,
)

FIELD_SEPARATOR = '/'
TRANSITION_SEPARATOR = ';'
TUPLE_SEPARATOR = ','


class MachineParts(NamedTuple):
    """The decoded fields of a machine encoding, not yet validated against each other."""
    states: Set[State]
    alphabet: Alphabet
    transitions: Set[Transition]
    initial_state: State
    accepting_states: Set[State]


def parse_transition(text: str) -> Transition:
    """
    Parses one ``from,symbol,to`` triple.

    Raises:
        FormatError: if the triple does not have exactly three parts, a state
            id is not an integer or the symbol is longer than one character
    """
    parts = text.split(TUPLE_SEPARATOR)
    if len(parts) != 3:
        raise FormatError(f"Transition '{text.strip()}' must have the form from,symbol,to")

    from_token, symbol, to_token = parts
    symbol = symbol.strip()
    if len(symbol) > 1:
        raise FormatError(f"Transition '{text.strip()}' has a multi-character symbol '{symbol}'")

    return Transition(State.parse(from_token), symbol or EPSILON, State.parse(to_token))


def parse_transition_list(text: str) -> List[Transition]:
    if not text.strip():
        return []
    return [parse_transition(part) for part in text.split(TRANSITION_SEPARATOR)]


def _parse_unique_states(text: str, field: str) -> Set[State]:
    states = parse_state_list(text)
    unique = set(states)
    if len(unique) != len(states):
        raise FormatError(f"Duplicate state id in {field}: '{text.strip()}'")
    return unique


def parse_machine(text: str) -> MachineParts:
    """
    Splits a machine encoding into its parts.

    Only the syntax is checked here; whether the parts agree with each other
    (declared states, alphabet membership, determinism) is checked by the
    machine constructors.

    Args:
        text: the machine encoding

    Returns:
        MachineParts: states, alphabet, transitions, initial and accepting states

    Raises:
        FormatError: if the encoding is malformed
    """
    if not isinstance(text, str):
        raise FormatError(f"Machine encoding must be a string, got {type(text).__name__}")

    fields = [field.strip() for field in text.split(FIELD_SEPARATOR)]
    if len(fields) == 4:
        fields.append('')
    if len(fields) != 5:
        raise FormatError(
            f"Machine encoding must have 5 '/' separated fields, got {len(fields)}")

    states_field, alphabet_field, transitions_field, initial_field, accepting_field = fields

    if not states_field:
        raise FormatError("Machine encoding declares no states")
    if not initial_field or len(initial_field.split()) != 1:
        raise FormatError(f"Initial state must be a single state id, got '{initial_field}'")

    return MachineParts(
        states=_parse_unique_states(states_field, 'states'),
        alphabet=Alphabet.parse(alphabet_field),
        transitions=set(parse_transition_list(transitions_field)),
        initial_state=State.parse(initial_field),
        accepting_states=_parse_unique_states(accepting_field, 'accepting states'),
    )


def encode_machine(machine) -> str:
    return FIELD_SEPARATOR.join([
        encode_state_set(machine.states),
        machine.alphabet.encode(),
        machine.transitions.encode(),
        machine.initial_state.encode(),
        encode_state_set(machine.accepting_states),
    ])


def pretty_print_machine(machine, out: TextIO) -> None:
    """Writes a set notation description of ``machine`` to ``out``. Display only, not parseable."""
    out.write(f"K = {pretty_print_state_set(machine.states)}\n")
    out.write(f"Σ = {machine.alphabet.pretty_print()}\n")
    out.write(f"{machine.transitions.pretty_name()} = {machine.transitions.pretty_print()}\n")
    out.write(f"s = {machine.initial_state}\n")
    out.write(f"A = {pretty_print_state_set(machine.accepting_states)}\n")
