"""Majority-category coloring for marker clusters."""

from __future__ import annotations

from typing import Dict, Iterable, Union

from .colors import UNKNOWN_CATEGORY, category_key, color_for
from .models import BreweryRecord

ClusterMember = Union[BreweryRecord, str]


def _member_category(member: ClusterMember) -> str:
    if isinstance(member, BreweryRecord):
        return category_key(member.category)
    return category_key(member)


def majority_category(members: Iterable[ClusterMember]) -> str:
    """Most frequent category among ``members``.

    Counts keep first-encounter order and the leader only changes on a
    strictly higher count, so ties go to the category seen first.
    """

    counts: Dict[str, int] = {}
    for member in members:
        category = _member_category(member)
        counts[category] = counts.get(category, 0) + 1

    top, best = UNKNOWN_CATEGORY, 0
    for category, count in counts.items():
        if count > best:
            top, best = category, count
    return top


def cluster_color(members: Iterable[ClusterMember]) -> str:
    return color_for(majority_category(members))
