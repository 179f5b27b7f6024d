# /app/services/need_helpers/reporters.py

"""
Shapes a list of need contributions into the two report forms: a flat,
ordered list and totals grouped by (item, properties).
"""

from typing import Dict, List, Optional, Tuple

from ...models.supply_request_model import SupplyNeedContribution, SupplyNeedGroup

# `None` properties and an empty list are different keys.
GroupKey = Tuple[str, Optional[Tuple[str, ...]]]


def flat_report(contributions: List[SupplyNeedContribution]) -> List[SupplyNeedContribution]:
    """Orders by item, then quantity. sorted() is stable, so ties keep production order."""
    return sorted(contributions, key=lambda c: (c.item, c.quantity))


def group_key(contribution: SupplyNeedContribution) -> GroupKey:
    properties = tuple(contribution.properties) if contribution.properties is not None else None
    return (contribution.item, properties)


def grouped_report(contributions: List[SupplyNeedContribution]) -> List[SupplyNeedGroup]:
    """
    Groups contributions by item and the exact, order-sensitive properties
    sequence. Members keep processing order. Groups are ordered by item
    ascending, then totalCount descending; remaining ties keep the order in
    which groups were first seen.
    """
    groups: Dict[GroupKey, SupplyNeedGroup] = {}
    for contribution in contributions:
        key = group_key(contribution)
        group = groups.get(key)
        if group is None:
            group = SupplyNeedGroup(
                item=contribution.item,
                properties=list(contribution.properties or []),
                totalCount=0,
            )
            groups[key] = group
        group.totalCount += contribution.count
        group.contributions.append(contribution)

    return sorted(groups.values(), key=lambda g: (g.item, -g.totalCount))
