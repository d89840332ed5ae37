from django.http import JsonResponse
from django.views.decorators.http import require_POST
from django.views.decorators.csrf import csrf_exempt
import json
import logging

from .conf import get_setting
from .fsa_components import EPSILON
from .fsa_equivalence import are_structurally_equivalent
from .fsa_machines import DFSM, NDFSM
from .fsa_properties import check_all_properties

logger = logging.getLogger(__name__)


class RequestError(ValueError):
    """A request that is well-formed JSON but misses or oversizes a field."""


def _load_body(request) -> dict:
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise RequestError("Request body must be a JSON object")
    return data


def _machine_from(data: dict, key: str, deterministic: bool = False):
    """
    Parses the machine encoding stored under ``key`` in the request body.

    Raises:
        RequestError: if the field is missing, not a string or too long
        FSAError: if the encoding does not describe a valid machine
    """
    encoding = data.get(key)
    if not encoding:
        raise RequestError(f"Missing machine encoding '{key}'")
    if not isinstance(encoding, str):
        raise RequestError(f"'{key}' must be a string")

    max_length = get_setting('FSA_MAX_ENCODING_LENGTH')
    if len(encoding) > max_length:
        raise RequestError(f"'{key}' is longer than {max_length} characters")

    machine_class = DFSM if deterministic else NDFSM
    return machine_class.parse(encoding)


def _bad_request(request, error: Exception) -> JsonResponse:
    logger.warning("Rejected %s: %s", request.path, error)
    return JsonResponse({'error': str(error)}, status=400)


def _server_error(request) -> JsonResponse:
    logger.exception("Unexpected failure on %s", request.path)
    return JsonResponse({'error': 'Server error'}, status=500)


@csrf_exempt
@require_POST
def convert_nfa_to_dfa(request):
    """
    Django view to handle NFA to DFA conversion requests.

    Expects a POST request with a JSON body containing:
    - encoding: The machine encoding (may be deterministic or non-deterministic)

    Returns a JSON response with the converted DFA, its canonic form and
    statistics about the conversion.
    """
    try:
        data = _load_body(request)
        nfa = _machine_from(data, 'encoding')

        dfa = nfa.to_dfsm()

        return JsonResponse({
            'dfa': dfa.encode(),
            'canonical': dfa.to_canonic_form().encode(),
            'original_stats': {
                'states_count': len(nfa.states),
                'transitions_count': len(nfa.transitions),
                'accepting_states_count': len(nfa.accepting_states),
            },
            'converted_stats': {
                'states_count': len(dfa.states),
                'transitions_count': len(dfa.transitions),
                'accepting_states_count': len(dfa.accepting_states),
            },
        })

    except ValueError as e:
        return _bad_request(request, e)
    except Exception:
        return _server_error(request)


@csrf_exempt
@require_POST
def canonical_form(request):
    """
    Django view returning the canonic form of a machine.

    Expects a POST request with a JSON body containing:
    - encoding: The machine encoding
    - deterministic: Optional, parse the machine as a DFSM (default False)
    """
    try:
        data = _load_body(request)
        fsa = _machine_from(data, 'encoding', bool(data.get('deterministic', False)))

        return JsonResponse({'canonical': fsa.to_canonic_form().encode()})

    except ValueError as e:
        return _bad_request(request, e)
    except Exception:
        return _server_error(request)


@csrf_exempt
@require_POST
def remove_unreachable(request):
    """
    Django view returning a machine without its unreachable states.

    Expects a POST request with a JSON body containing:
    - encoding: The machine encoding
    - deterministic: Optional, parse the machine as a DFSM (default False)
    """
    try:
        data = _load_body(request)
        fsa = _machine_from(data, 'encoding', bool(data.get('deterministic', False)))
        pruned = fsa.remove_unreachable_states()

        return JsonResponse({
            'encoding': pruned.encode(),
            'states_removed': len(fsa.states) - len(pruned.states),
        })

    except ValueError as e:
        return _bad_request(request, e)
    except Exception:
        return _server_error(request)


@csrf_exempt
@require_POST
def compute(request):
    """
    Django view to run a machine on an input string.

    Expects a POST request with a JSON body containing:
    - encoding: The machine encoding
    - input: The input string to run (default empty)
    - deterministic: Optional, parse the machine as a DFSM (default False);
      a non-deterministic machine follows all of its branches at once

    Returns a JSON response telling whether the input is accepted.
    """
    try:
        data = _load_body(request)
        fsa = _machine_from(data, 'encoding', bool(data.get('deterministic', False)))

        input_string = data.get('input', '')
        if not isinstance(input_string, str):
            raise RequestError("'input' must be a string")
        max_length = get_setting('FSA_MAX_INPUT_LENGTH')
        if len(input_string) > max_length:
            raise RequestError(f"'input' is longer than {max_length} characters")

        return JsonResponse({'accepted': fsa.compute(input_string)})

    except ValueError as e:
        return _bad_request(request, e)
    except Exception:
        return _server_error(request)


@csrf_exempt
@require_POST
def check_fsa_properties(request):
    """
    Django view to check FSA properties (deterministic, complete, connected).

    Expects a POST request with a JSON body containing:
    - encoding: The machine encoding

    Returns a JSON response with property check results.
    """
    try:
        data = _load_body(request)
        fsa = _machine_from(data, 'encoding')

        return JsonResponse({
            'properties': check_all_properties(fsa),
            'summary': {
                'total_states': len(fsa.states),
                'alphabet_size': len(fsa.alphabet),
                'starting_state': fsa.initial_state.id,
                'accepting_states_count': len(fsa.accepting_states),
                'has_epsilon_transitions': any(t.symbol == EPSILON for t in fsa.transitions),
            }
        })

    except ValueError as e:
        return _bad_request(request, e)
    except Exception:
        return _server_error(request)


@csrf_exempt
@require_POST
def compare(request):
    """
    Django view comparing two machines structurally.

    Expects a POST request with a JSON body containing:
    - first: The first machine encoding
    - second: The second machine encoding

    Both machines are compared through their canonic forms; this is
    structural equality of the reachable parts, not language equivalence.
    """
    try:
        data = _load_body(request)
        first = _machine_from(data, 'first')
        second = _machine_from(data, 'second')

        return JsonResponse({
            'equivalent': are_structurally_equivalent(first, second),
            'first_canonical': first.to_canonic_form().encode(),
            'second_canonical': second.to_canonic_form().encode(),
        })

    except ValueError as e:
        return _bad_request(request, e)
    except Exception:
        return _server_error(request)
