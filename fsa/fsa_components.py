from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .exceptions import FormatError

# The empty string can never be a one-character symbol, so it is reserved for
# moves that consume no input. It is never a member of an Alphabet.
EPSILON = ''

# Characters used by the text encoding itself
SEPARATORS = ('/', ',', ';')


def symbol_rank(symbol: str) -> Tuple[int, str]:
    """Sort key placing EPSILON before every real symbol."""
    return (0, '') if symbol == EPSILON else (1, symbol)


@dataclass(frozen=True, order=True)
class State:
    """A machine state. States carry no behaviour, only their integer identity."""
    id: int

    def __post_init__(self):
        if not isinstance(self.id, int) or isinstance(self.id, bool) or self.id < 0:
            raise FormatError(f"State id must be a non-negative integer, got {self.id!r}")

    @classmethod
    def parse(cls, token: str) -> 'State':
        token = token.strip()
        if not token.isdecimal():
            raise FormatError(f"Invalid state id: '{token}'")
        return cls(int(token))

    def encode(self) -> str:
        return str(self.id)

    def __str__(self):
        return self.encode()


def parse_state_list(text: str) -> List[State]:
    """
    Parses a whitespace separated list of state ids.

    Args:
        text: e.g. ``"0 1 2"``; may be empty

    Returns:
        List[State]: the states in the order they were written

    Raises:
        FormatError: if a token is not a non-negative integer
    """
    return [State.parse(token) for token in text.split()]


def encode_state_set(states: Iterable[State]) -> str:
    """Encodes states as space separated ids in ascending order."""
    return ' '.join(state.encode() for state in sorted(states))


def pretty_print_state_set(states: Iterable[State]) -> str:
    return '{' + ', '.join(state.encode() for state in sorted(states)) + '}'


def pretty_symbol(symbol: str) -> str:
    return 'ε' if symbol == EPSILON else symbol


@dataclass(frozen=True)
class Transition:
    """A single move: from ``from_state`` reading ``symbol`` (or EPSILON) to ``to_state``."""
    from_state: State
    symbol: str
    to_state: State

    def sort_key(self) -> Tuple[int, Tuple[int, str], int]:
        return self.from_state.id, symbol_rank(self.symbol), self.to_state.id

    def encode(self) -> str:
        return f"{self.from_state.encode()},{self.symbol},{self.to_state.encode()}"

    def pretty_print(self) -> str:
        return f"({self.from_state}, {pretty_symbol(self.symbol)}, {self.to_state})"


class Alphabet:
    """
    A finite, ordered set of one-character symbols.

    Iteration follows declaration order (the order in which symbols were
    first given to the constructor or appeared in the parsed text). EPSILON
    is never a member.
    """

    def __init__(self, symbols: Iterable[str]):
        ordered = []
        for symbol in symbols:
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise FormatError(f"Alphabet symbols must be single characters, got {symbol!r}")
            if symbol.isspace() or symbol in SEPARATORS:
                raise FormatError(f"'{symbol}' cannot be used as an alphabet symbol")
            if symbol in ordered:
                raise FormatError(f"Duplicate alphabet symbol '{symbol}'")
            ordered.append(symbol)

        if not ordered:
            raise FormatError("Alphabet must contain at least one symbol")

        self._symbols: Tuple[str, ...] = tuple(ordered)

    @classmethod
    def parse(cls, text: str) -> 'Alphabet':
        """
        Parses a whitespace separated list of symbols.

        Raises:
            FormatError: on an empty alphabet, a token longer than one
                character or a repeated symbol
        """
        return cls(text.split())

    def encode(self) -> str:
        return ' '.join(self._symbols)

    def pretty_print(self) -> str:
        return '{' + ', '.join(self._symbols) + '}'

    def with_epsilon(self) -> Tuple[str, ...]:
        """EPSILON followed by the symbols in declaration order."""
        return (EPSILON,) + self._symbols

    def __contains__(self, symbol) -> bool:
        return symbol in self._symbols

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __eq__(self, other):
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self):
        return hash(self._symbols)

    def __repr__(self):
        return f"Alphabet({self.encode()!r})"
