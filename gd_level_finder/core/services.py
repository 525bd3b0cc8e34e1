"""
Application Services - Use cases that orchestrate domain logic

These are the entry points to the core. They coordinate between
domain models and ports, but contain no infrastructure concerns.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from .domain import CandidateRef, FilterSpec, Match, SearchReport
from .errors import DetailFetchFailed, RemoteUnavailable
from .filters import DEFAULT_SCALE, DifficultyScale, rejection_reason
from .ports import LevelIndex

logger = logging.getLogger(__name__)

# Detail fetches in flight per command; more trips upstream rate limits
DEFAULT_CONCURRENCY = 5
MAX_CONCURRENCY = 10

ACCEPTED = "accepted"
REJECTED = "rejected"
SKIPPED = "skipped"


@dataclass(frozen=True)
class CandidateOutcome:
    """Typed result of evaluating one candidate"""
    level_id: str
    status: str  # ACCEPTED, REJECTED or SKIPPED
    match: Optional[Match] = None
    reason: Optional[str] = None

    @classmethod
    def accepted(cls, match: Match) -> "CandidateOutcome":
        return cls(level_id=match.level_id, status=ACCEPTED, match=match)

    @classmethod
    def rejected(cls, level_id: str, reason: str) -> "CandidateOutcome":
        return cls(level_id=level_id, status=REJECTED, reason=reason)

    @classmethod
    def skipped(cls, level_id: str, reason: str) -> "CandidateOutcome":
        return cls(level_id=level_id, status=SKIPPED, reason=reason)


def build_remote_query(spec: FilterSpec) -> tuple[Optional[str], dict[str, str]]:
    """Map the remote-expressible part of a FilterSpec to (query, filters)"""
    filters = {}
    if spec.length_category is not None:
        filters["length"] = spec.length_category.value
    if spec.difficulty_active:
        filters["difficulty"] = spec.difficulty.value
    return spec.query, filters


def fold_outcomes(spec: FilterSpec, outcomes: list[CandidateOutcome]) -> SearchReport:
    """
    Fold per-candidate outcomes into a report.

    Accepted matches keep the remote order; every skip is logged once.
    """
    report = SearchReport(spec=spec, matches=[], examined=len(outcomes))
    for outcome in outcomes:
        if outcome.status == ACCEPTED:
            report.matches.append(outcome.match)
        elif outcome.status == REJECTED:
            report.rejected += 1
            logger.debug(f"Level {outcome.level_id} rejected: {outcome.reason}")
        else:
            report.skipped += 1
            logger.warning(f"Level {outcome.level_id} skipped: {outcome.reason}")
    return report


class FindLevelsService:
    """Use case: Search the level index and keep levels matching every filter"""

    def __init__(
        self,
        index: LevelIndex,
        concurrency: int = DEFAULT_CONCURRENCY,
        scale: DifficultyScale = DEFAULT_SCALE,
        sort: Optional[str] = None
    ):
        self.index = index
        self.concurrency = min(max(concurrency, 1), MAX_CONCURRENCY)
        self.scale = scale
        self.sort = sort

    async def execute(self, spec: FilterSpec) -> SearchReport:
        """
        Run the search-and-filter pipeline.

        An unreachable index yields an empty report with `error` set rather
        than raising; individual candidate failures are skipped.
        """
        query, filters = build_remote_query(spec)

        try:
            candidates = await self.index.search(query, spec.check_limit, sort=self.sort, filters=filters)
        except RemoteUnavailable as e:
            logger.warning(f"Level search unavailable (query={query!r}): {e}")
            return SearchReport(spec=spec, matches=[], error=str(e))

        logger.info(f"Checking {len(candidates)} candidates (query={query!r}, filters={filters})")

        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(candidate: CandidateRef) -> CandidateOutcome:
            async with semaphore:
                return await self.evaluate(candidate, spec)

        # gather keeps input order and cancels in-flight fetches if we are cancelled
        outcomes = await asyncio.gather(*(bounded(c) for c in candidates))

        report = fold_outcomes(spec, list(outcomes))
        logger.info(
            f"Search done: {len(report.matches)} matched, {report.rejected} rejected, "
            f"{report.skipped} skipped of {report.examined}"
        )
        return report

    async def evaluate(self, candidate: CandidateRef, spec: FilterSpec) -> CandidateOutcome:
        """Fetch one candidate's detail and apply the filter predicate"""
        try:
            record = await self.index.get_detail(candidate.level_id)
            reason = rejection_reason(spec, record, self.scale)
        except DetailFetchFailed as e:
            return CandidateOutcome.skipped(candidate.level_id, str(e))
        except Exception as e:
            # Malformed payloads only cost this candidate
            return CandidateOutcome.skipped(candidate.level_id, f"{type(e).__name__}: {e}")

        if reason is not None:
            return CandidateOutcome.rejected(candidate.level_id, reason)
        return CandidateOutcome.accepted(Match.from_record(record))
