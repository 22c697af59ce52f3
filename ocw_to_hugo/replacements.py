"""
replacements.py - Splice link replacements into the original text

Matches carry offsets into the unmodified text. Applying them from the
highest offset down keeps every lower offset valid, so no renormalisation
is needed and the result does not depend on the order matches arrive in.
"""

import logging
from typing import Iterable, List

from ocw_to_hugo.models import ReplacementMatch

logger = logging.getLogger(__name__)


def _ascending(match: ReplacementMatch):
    return (match.start, -match.length, match.replacement)


def _descending(match: ReplacementMatch):
    return (match.start, match.length, match.replacement)


def unify_matches(matches: Iterable[ReplacementMatch]) -> List[ReplacementMatch]:
    """
    Merge match lists from several rules into one non-overlapping list.

    Earlier starts win; at the same start the longer span wins. Dropped
    matches are logged, since the rules should not produce overlaps.
    """
    kept: List[ReplacementMatch] = []
    for match in sorted(set(matches), key=_ascending):
        if kept and match.overlaps(kept[-1]):
            logger.warning(
                f"[links] dropping overlapping replacement at {match.start}:{match.end} "
                f"(kept {kept[-1].start}:{kept[-1].end})"
            )
            continue
        kept.append(match)
    return kept


def apply_replacements(text: str, matches: Iterable[ReplacementMatch]) -> str:
    """
    Apply replacements to `text`, highest start offset first.

    `matches` is expected to be non-overlapping (see unify_matches).
    """
    result = text
    for match in sorted(matches, key=_descending, reverse=True):
        result = result[:match.start] + match.replacement + result[match.end:]
    return result
