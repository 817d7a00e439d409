"""Prefix deriver — assigns a unique 3 letter prefix to each model name.

Prefixes are derived by trying an ordered list of strategies against the
model name, from the most readable to the most mechanical, and taking the
first 3 letter candidate not already assigned in the same batch:

    account -> acc, invoice -> inv, invite -> ivt, session -> ssn

Run once when a schema is defined; the resulting map is what ``encode_id``
and ``decode_id`` callers use as their prefixes.
"""

import logging
import re
from typing import Callable, Optional, Sequence

from puidv7.core.errors import (
    DuplicateModelNamesError,
    HeuristicInvariantViolationError,
    InvalidModelNamesError,
    PrefixExhaustedError,
)

logger = logging.getLogger(__name__)

MODEL_NAME_PATTERN = re.compile(r"^[a-z]{1,100}$")
VOWELS = "aeiou"

PrefixStrategy = Callable[[list[str]], Optional[str]]


def _exact_length(chars: list[str]) -> Optional[str]:
    # task -> None, mfa -> mfa
    if len(chars) == 3:
        return "".join(chars)
    return None


def _skip_vowels_and_repeats(chars: list[str], offset: int) -> Optional[str]:
    consonants = [c for c in chars[offset:] if c not in VOWELS]
    # Each survivor is compared with the name character just before its
    # position in the filtered list, not with its own neighbour in the name.
    survivors = [
        c for i, c in enumerate(consonants)
        if i == 0 or c != chars[i - 1]
    ]
    if not survivors:
        return None
    if len(survivors) == 1:
        return chars[0] + survivors[0] * 2
    return chars[0] + survivors[0] + survivors[1]


def _skip_first(chars: list[str]) -> Optional[str]:
    # session -> ssn, setup -> stp
    return _skip_vowels_and_repeats(chars, 1)


def _skip_first_two(chars: list[str]) -> Optional[str]:
    # invite -> ivt
    if len(chars) < 4:
        return None
    return _skip_vowels_and_repeats(chars, 2)


def _consonants(chars: list[str]) -> Optional[str]:
    # session -> sss; may come back shorter than 3
    return chars[0] + "".join([c for c in chars[1:] if c not in VOWELS][:2])


def _consonants_fallback(chars: list[str]) -> Optional[str]:
    # Same as _consonants for now; kept as its own slot in the order.
    return chars[0] + "".join([c for c in chars[1:] if c not in VOWELS][:2])


def _first_three(chars: list[str]) -> Optional[str]:
    # setup -> set
    return "".join(chars[:3])


PREFIX_STRATEGIES: list[PrefixStrategy] = [
    _exact_length,
    _skip_first,
    _skip_first_two,
    _consonants,
    _consonants_fallback,
    _first_three,
]


def model_to_prefix(model: str, assigned: dict[str, str]) -> str:
    """Derive a prefix for one model that is not yet a key of ``assigned``.

    Records ``assigned[prefix] = model`` and returns the prefix.

    Raises:
        InvalidModelNamesError: if the model is shorter than 3 characters.
        HeuristicInvariantViolationError: if a strategy returns a candidate
            that is not exactly 3 characters.
        PrefixExhaustedError: if every candidate is already taken.
    """
    if len(model) < 3:
        raise InvalidModelNamesError([model])

    chars = list(model.lower())
    for strategy in PREFIX_STRATEGIES:
        candidate = strategy(chars)
        if not candidate:
            continue
        if len(candidate) != 3:
            raise HeuristicInvariantViolationError(model, candidate)
        if candidate not in assigned:
            assigned[candidate] = model
            logger.debug(f"Assigned prefix '{candidate}' to model '{model}' via {strategy.__name__}")
            return candidate

    raise PrefixExhaustedError(model)


def check_model_names(model_names: Sequence[str]) -> None:
    """Validate a batch of model names, reporting every bad name at once.

    Raises:
        InvalidModelNamesError: names not matching ``^[a-z]{1,100}$``.
        DuplicateModelNamesError: names that appear more than once.
    """
    seen: set[str] = set()
    invalid: list[str] = []
    duplicates: list[str] = []

    for model in model_names:
        if not isinstance(model, str) or not MODEL_NAME_PATTERN.fullmatch(model):
            invalid.append(model)
            continue
        if model in seen:
            duplicates.append(model)
        else:
            seen.add(model)

    if invalid:
        raise InvalidModelNamesError(invalid)
    if duplicates:
        raise DuplicateModelNamesError(duplicates)


def derive_prefixes(
    model_names: Sequence[str],
    reserved: Optional[dict[str, str]] = None,
) -> dict[str, str]:
    """Map a unique 3 letter prefix to each model name.

    Args:
        model_names: Lowercase a-z model names, unique, in the order
            prefixes should be assigned.
        reserved: Prefixes already in use (prefix -> model). Candidates
            colliding with these are skipped; they are not part of the result.

    Returns:
        Dict of prefix -> model name in input order.
    """
    check_model_names(model_names)

    assigned: dict[str, str] = dict(reserved or {})
    prefixes: dict[str, str] = {}
    for model in model_names:
        prefix = model_to_prefix(model, assigned)
        prefixes[prefix] = model

    logger.info(f"Derived {len(prefixes)} prefixes")
    return prefixes
