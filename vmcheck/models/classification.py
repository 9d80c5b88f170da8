"""Exclusion classification of a record as it moves through the filter pipeline.

A record carries a single ``Classification`` instead of the three correlated
booleans (excluded / explicitly included / explicitly excluded). Each filter
stage reports a ``StageOutcome`` per record and ``apply`` looks up the next
state in a total transition table. ``EXPLICITLY_EXCLUDED`` is absorbing: no
outcome leads out of it.
"""

from __future__ import annotations

from enum import StrEnum


class Classification(StrEnum):
    """Exclusion state of a record."""

    UNDECIDED = "undecided"
    EXPLICITLY_INCLUDED = "explicitly_included"
    IMPLICITLY_EXCLUDED = "implicitly_excluded"
    EXPLICITLY_EXCLUDED = "explicitly_excluded"

    @property
    def excluded(self) -> bool:
        return self in (Classification.IMPLICITLY_EXCLUDED, Classification.EXPLICITLY_EXCLUDED)


class StageOutcome(StrEnum):
    """What a single filter stage observed for one record."""

    INCLUDE_MATCH = "include_match"
    INCLUDE_MISS = "include_miss"
    EXCLUDE_MATCH = "exclude_match"
    EXCLUDE_MISS = "exclude_miss"


_C = Classification
_O = StageOutcome

_TRANSITIONS: dict[tuple[Classification, StageOutcome], Classification] = {
    (_C.UNDECIDED, _O.INCLUDE_MATCH): _C.EXPLICITLY_INCLUDED,
    (_C.UNDECIDED, _O.INCLUDE_MISS): _C.IMPLICITLY_EXCLUDED,
    (_C.UNDECIDED, _O.EXCLUDE_MATCH): _C.EXPLICITLY_EXCLUDED,
    (_C.UNDECIDED, _O.EXCLUDE_MISS): _C.UNDECIDED,
    (_C.EXPLICITLY_INCLUDED, _O.INCLUDE_MATCH): _C.EXPLICITLY_INCLUDED,
    (_C.EXPLICITLY_INCLUDED, _O.INCLUDE_MISS): _C.EXPLICITLY_INCLUDED,
    (_C.EXPLICITLY_INCLUDED, _O.EXCLUDE_MATCH): _C.EXPLICITLY_EXCLUDED,
    (_C.EXPLICITLY_INCLUDED, _O.EXCLUDE_MISS): _C.EXPLICITLY_INCLUDED,
    (_C.IMPLICITLY_EXCLUDED, _O.INCLUDE_MATCH): _C.EXPLICITLY_INCLUDED,
    (_C.IMPLICITLY_EXCLUDED, _O.INCLUDE_MISS): _C.IMPLICITLY_EXCLUDED,
    (_C.IMPLICITLY_EXCLUDED, _O.EXCLUDE_MATCH): _C.EXPLICITLY_EXCLUDED,
    (_C.IMPLICITLY_EXCLUDED, _O.EXCLUDE_MISS): _C.IMPLICITLY_EXCLUDED,
    (_C.EXPLICITLY_EXCLUDED, _O.INCLUDE_MATCH): _C.EXPLICITLY_EXCLUDED,
    (_C.EXPLICITLY_EXCLUDED, _O.INCLUDE_MISS): _C.EXPLICITLY_EXCLUDED,
    (_C.EXPLICITLY_EXCLUDED, _O.EXCLUDE_MATCH): _C.EXPLICITLY_EXCLUDED,
    (_C.EXPLICITLY_EXCLUDED, _O.EXCLUDE_MISS): _C.EXPLICITLY_EXCLUDED,
}


def apply(current: Classification, outcome: StageOutcome) -> Classification:
    """Return the classification reached from *current* after *outcome*."""
    return _TRANSITIONS[(current, outcome)]


def sets_exclude_reason(current: Classification, outcome: StageOutcome) -> bool:
    """Return True if this transition should record the stage as the exclude reason.

    An exclude match always records its stage, even on a record that is
    already explicitly excluded. An include miss records its stage unless the
    record was explicitly included. The last writing stage wins.
    """
    if outcome is StageOutcome.EXCLUDE_MATCH:
        return True
    if outcome is StageOutcome.INCLUDE_MISS:
        return current is not Classification.EXPLICITLY_INCLUDED
    return False
