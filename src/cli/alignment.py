from __future__ import annotations

import argparse
import signal
from typing import TYPE_CHECKING, Any, Sequence

from src.domain.entities import AlignmentCheck
from src.domain.value_objects.enums import AlignmentOutcome
from src.infrastructure.alignment_api_client import NotificationError
from src.logging_config import get_logger
from src.repositories.errors import StorageError

if TYPE_CHECKING:  # pragma: no cover
    from src.application.services.runtime import AlignmentRuntime


def _build_runtime() -> "AlignmentRuntime":
    # Lazy import: settings are built from the environment on import
    from src.application.services.runtime import AlignmentRuntime
    from src.config.settings import settings

    return AlignmentRuntime(settings)


def _format_check(result: AlignmentCheck) -> str:
    if result.outcome is AlignmentOutcome.NOT_FOUND:
        return f"Match {result.match_id} not found"
    if result.outcome is AlignmentOutcome.CORRECT:
        return f"Match {result.match_id} has correct alignment"
    lines = [f"Match {result.match_id} has incorrect alignment:"]
    if result.report is not None:
        lines.extend(f"- {v}" for v in result.report.violations)
    if result.notified:
        lines.append("Alignment API notified.")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Check match alignments and notify the alignment API")
    sub = p.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Check a single match now")
    check.add_argument("--match-id", type=int, required=True, help="Match identifier")

    sub.add_parser("sweep", help="Check all matches starting within the lookahead window once")
    sub.add_parser("run", help="Run the periodic checker until interrupted")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    get_logger()
    runtime = _build_runtime()

    if args.command == "run":
        scheduler = runtime.scheduler()

        def _request_stop(signum: int, frame: Any) -> None:
            scheduler.stop()

        signal.signal(signal.SIGINT, _request_stop)
        signal.signal(signal.SIGTERM, _request_stop)
        scheduler.run()
        return 0

    try:
        with runtime.scope() as run:
            if args.command == "sweep":
                count = run.sweep()
                print(f"Notifications sent: {count}")
                return 0
            result = run.check_match(int(args.match_id))
    except StorageError as exc:
        print(f"Storage error: {exc}")
        return 2
    except NotificationError as exc:
        print(f"Notification failed (status={exc.status_code}): {exc}")
        return 2

    print(_format_check(result))
    return 0 if result.is_correct else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
