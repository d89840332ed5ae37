class FSAError(ValueError):
    """Base class for every error raised while building or reading a machine."""


class FormatError(FSAError):
    """The textual encoding of a machine (or of one of its parts) is malformed."""


class InvalidStateError(FSAError):
    """The initial state or an accepting state is not one of the machine's states."""


class InvalidTransitionError(FSAError):
    """A transition references a state or a symbol the machine does not declare."""


class NotDeterministicError(FSAError):
    """A machine claimed deterministic has an epsilon move or several destinations."""
