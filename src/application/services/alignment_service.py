"""Alignment checks for a single match and for the upcoming-match window."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol, Sequence

from src.application.services.alignment_validator import validate
from src.domain.entities import AlignmentCheck, MatchSnapshot, ViolationReport
from src.domain.value_objects.enums import AlignmentOutcome
from src.domain.value_objects.ids import MatchId
from src.infrastructure.alignment_api_client import NotificationError
from src.infrastructure.ttl_cache import TTLCache
from src.repositories.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD = timedelta(minutes=5)


class _MatchQueryProto(Protocol):
    def find_upcoming(
        self, window_start: datetime, window_end: datetime
    ) -> Sequence[MatchSnapshot]: ...

    def find_by_id(self, match_id: int) -> Optional[MatchSnapshot]: ...


class _NotifierProto(Protocol):
    def notify(self, match_ids: Sequence[int]) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AlignmentCheckRun:
    """Validate match alignments and report violators to the alignment API.

    - :meth:`check_match` / :meth:`check_one` handle a single match on demand.
    - :meth:`sweep` checks every scheduled match starting within the lookahead
      window and notifies once per violating match.

    Storage is re-queried on every call. When a ``ledger`` is given, the sweep
    skips matches notified within the ledger's TTL; failed notifications are
    never recorded, so the next sweep tries them again.
    """

    def __init__(
        self,
        matches: _MatchQueryProto,
        notifier: _NotifierProto,
        *,
        lookahead: timedelta = DEFAULT_LOOKAHEAD,
        ledger: Optional[TTLCache[int, datetime]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._matches = matches
        self._notifier = notifier
        self._lookahead = lookahead
        self._ledger = ledger
        self._clock = clock

    def check_match(self, match_id: int) -> AlignmentCheck:
        """Check one match and notify the API if its alignment is incorrect.

        ``StorageError`` and ``NotificationError`` propagate to the caller.
        """

        logger.info("Checking alignment for match %s", match_id, extra={"match_id": match_id})
        snapshot = self._matches.find_by_id(match_id)
        if snapshot is None:
            logger.warning("Match %s not found", match_id, extra={"match_id": match_id})
            return AlignmentCheck(match_id=MatchId(match_id), outcome=AlignmentOutcome.NOT_FOUND)

        report = validate(snapshot)
        if not report.has_violation:
            return AlignmentCheck(
                match_id=snapshot.id, outcome=AlignmentOutcome.CORRECT, report=report
            )

        _log_violations(report)
        try:
            self._notify(snapshot.id)
        except NotificationError as exc:
            logger.error(
                "Error notifying incorrect alignment for match %s: %s",
                snapshot.id,
                exc,
                extra={"match_id": snapshot.id},
            )
            raise
        return AlignmentCheck(
            match_id=snapshot.id,
            outcome=AlignmentOutcome.INCORRECT,
            report=report,
            notified=True,
        )

    def check_one(self, match_id: int) -> bool:
        """Return ``True`` only when the match exists and is correctly aligned."""
        return self.check_match(match_id).is_correct

    def sweep(self, now: Optional[datetime] = None) -> int:
        """Check matches starting in ``[now, now + lookahead]``.

        Returns the number of notifications sent. A storage failure ends the
        sweep early; a failure on one match is logged and the sweep moves on.
        """

        start = now if now is not None else self._clock()
        end = start + self._lookahead
        sent = 0

        logger.info("Looking for matches scheduled between %s and %s", start, end)
        try:
            upcoming = self._matches.find_upcoming(start, end)
        except StorageError as exc:
            logger.error("Could not load upcoming matches: %s", exc, exc_info=True)
            return sent

        logger.info("Found %d upcoming matches to check", len(upcoming))
        for match in upcoming:
            try:
                if self._check_upcoming(match):
                    sent += 1
            except NotificationError as exc:
                logger.error(
                    "Failed to notify API about incorrect alignment for match %s. "
                    "Status: %s, Response: %s",
                    match.id,
                    exc.status_code,
                    exc.body,
                    extra={"match_id": match.id},
                )
            except Exception:
                logger.exception(
                    "Unexpected error checking alignment for match %s",
                    match.id,
                    extra={"match_id": match.id},
                )
        return sent

    def _check_upcoming(self, match: MatchSnapshot) -> bool:
        logger.info(
            "Checking alignment for match %s scheduled at %s",
            match.id,
            match.scheduled_start,
            extra={"match_id": match.id},
        )
        report = validate(match)
        if not report.has_violation:
            logger.info("Match %s has correct alignment", match.id, extra={"match_id": match.id})
            return False

        _log_violations(report)
        if self._ledger is not None and match.id in self._ledger:
            logger.debug(
                "Match %s already notified, skipping", match.id, extra={"match_id": match.id}
            )
            return False

        self._notify(match.id)
        logger.warning(
            "Notification sent: Match %s has incorrect alignment",
            match.id,
            extra={"match_id": match.id},
        )
        return True

    def _notify(self, match_id: int) -> None:
        self._notifier.notify([match_id])
        if self._ledger is not None:
            self._ledger.set(match_id, self._clock())


def _log_violations(report: ViolationReport) -> None:
    logger.warning(
        "Match %s has incorrect alignment: %s",
        report.match_id,
        "; ".join(report.violations),
        extra={"match_id": report.match_id, "violations": list(report.violations)},
    )
