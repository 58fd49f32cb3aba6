"\"\"\"Candidate validation status resolution.\"\"\""

from __future__ import annotations

from typing import Iterable

from ..schemas import Decision, ResolvedStatus, ReviewType, ValidationRecord


def latest_by_track(
    records: Iterable[ValidationRecord],
) -> dict[ReviewType, ValidationRecord]:
    """Return the most recent record for each review track.

    Only a strictly later timestamp replaces the current pick, so on equal
    timestamps the record encountered first is kept.
    """

    latest: dict[ReviewType, ValidationRecord] = {}
    for record in records:
        current = latest.get(record.review_type)
        if current is None or record.timestamp > current.timestamp:
            latest[record.review_type] = record
    return latest


def initial_status(requires_technical: bool) -> ResolvedStatus:
    """Status of a candidate nobody has reviewed yet."""
    return resolve_status([], requires_technical)


def resolve_status(
    records: Iterable[ValidationRecord],
    requires_technical: bool,
) -> ResolvedStatus:
    """Compute the pipeline status from a candidate's validation history.

    Non-technical roles only consider the sales track; tech records are
    ignored there. For technical roles a tech rejection is final, a tech
    approval validates the candidate once sales has answered either way, and
    nothing progresses before the tech track has decided.
    """

    latest = latest_by_track(records)
    sales = latest.get(ReviewType.SALES)
    tech = latest.get(ReviewType.TECH)

    if not requires_technical:
        if sales is None:
            return ResolvedStatus.PENDING_SALES
        if sales.decision is Decision.APPROVED:
            return ResolvedStatus.VALIDATED
        return ResolvedStatus.REJECTED

    if tech is None:
        return ResolvedStatus.PENDING_TECH
    if tech.decision is Decision.REJECTED:
        return ResolvedStatus.REJECTED
    if tech.decision is Decision.APPROVED:
        if sales is None:
            return ResolvedStatus.PENDING_SALES
        # a sales rejection does not block a technically approved candidate
        return ResolvedStatus.VALIDATED

    return ResolvedStatus.PENDING


class StatusResolver:
    """Stateless resolver object for injection into workflows and pipelines."""

    def resolve(
        self,
        records: Iterable[ValidationRecord],
        requires_technical: bool,
    ) -> ResolvedStatus:
        return resolve_status(records, requires_technical)

    def initial(self, requires_technical: bool) -> ResolvedStatus:
        return initial_status(requires_technical)


__all__ = [
    "StatusResolver",
    "initial_status",
    "latest_by_track",
    "resolve_status",
]
