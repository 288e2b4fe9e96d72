"""
Counter drift detection and repair.

Compares each tuit's like/dislike/bookmark counter with the number of rows in
`relations` for that tuit and kind. Drift is expected when the legacy counter
strategy has been used under concurrent load, or when rows were changed by
hand outside ToggleService.

Usage:
    python -m tasks.counter_drift          # Report only (default)
    python -m tasks.counter_drift --fix    # Report and repair drifted counters
"""
import argparse
import asyncio
import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import async_session_factory
from models.relation import Relation, RelationKind
from models.tuit import Tuit
from services.counter_writer import CounterWriter

logger = logging.getLogger(__name__)


@dataclass
class DriftStats:
    """Statistics from a counter drift run."""

    checked: int = 0
    drifted: int = 0
    repaired: int = 0
    by_kind: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, int | dict[str, int]]:
        """Convert to simple dict for logging/return."""
        return {
            "checked": self.checked,
            "drifted": self.drifted,
            "repaired": self.repaired,
            "by_kind": dict(self.by_kind),
        }


async def find_drifted_counters(
    db: AsyncSession,
    kind: RelationKind,
) -> list[tuple[UUID, int, int]]:
    """
    Find tuits whose stored counter differs from the actual relation count.

    Returns:
        (tuit_id, stored, actual) for each drifted tuit.
    """
    counter = getattr(Tuit, kind.counter_attr)
    actual = (
        select(func.count(Relation.id))
        .where(Relation.subject_id == Tuit.id, Relation.kind == kind)
        .scalar_subquery()
    )
    result = await db.execute(
        select(Tuit.id, counter, actual).where(counter != actual),
    )
    return [(row[0], row[1], row[2]) for row in result.all()]


async def check_counter_drift(db: AsyncSession, fix: bool = False) -> DriftStats:
    """
    Find and optionally repair drifted counters for every relation kind.

    Args:
        db: Database session.
        fix: If True, recompute drifted counters from the relation table.
             If False (default), only report them.

    Returns:
        DriftStats. `drifted` counts (tuit, kind) pairs, so a tuit with two
        wrong counters is counted twice.
    """
    stats = DriftStats()
    stats.checked = await db.scalar(select(func.count(Tuit.id))) or 0
    writer = CounterWriter(db)

    for kind in RelationKind:
        drifted = await find_drifted_counters(db, kind)
        if not drifted:
            continue

        stats.drifted += len(drifted)
        stats.by_kind[kind.value] = len(drifted)
        for tuit_id, stored, actual in drifted:
            logger.info(
                "Tuit %s %s: stored=%d actual=%d", tuit_id, kind.counter_attr, stored, actual,
            )

        if fix:
            stats.repaired += await writer.recount([t[0] for t in drifted], kind)

    if fix:
        await db.commit()

    return stats


async def run_counter_drift(
    db: AsyncSession | None = None,
    fix: bool = False,
) -> DriftStats:
    """
    Entry point for the counter drift check.

    Args:
        db: Database session. If None, creates one from async_session_factory.
        fix: If True, repair drifted counters.

    Returns:
        DriftStats with results.
    """
    logger.info("Starting counter drift check (fix=%s)", fix)

    if db is not None:
        stats = await check_counter_drift(db, fix=fix)
    else:
        async with async_session_factory() as session:
            stats = await check_counter_drift(session, fix=fix)

    logger.info("Counter drift check complete: %s", stats.to_dict())
    return stats


def main() -> None:
    """CLI entry point with --fix flag."""
    parser = argparse.ArgumentParser(
        description="Detect and optionally repair drifted like/dislike/bookmark counters.",
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Recompute drifted counters (default: report only)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_counter_drift(fix=args.fix))


if __name__ == "__main__":
    main()
