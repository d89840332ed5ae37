from django.conf import settings

DEFAULTS = {
    # Longest machine encoding the API accepts, in characters
    'FSA_MAX_ENCODING_LENGTH': 100000,
    # Longest input string the compute endpoint accepts
    'FSA_MAX_INPUT_LENGTH': 100000,
}


def get_setting(name: str):
    """Returns the Django setting ``name``, or its default from DEFAULTS."""
    return getattr(settings, name, DEFAULTS[name])
