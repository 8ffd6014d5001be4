"""Weekly prize settlement: top performers split a share of the closed week's pool."""

import logging
from typing import NamedTuple, Protocol, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from streak_quest.config import get_settings
from streak_quest.crud import crud_week_closure
from streak_quest.models.week_closure import ClosureStatus, Payout, WeekClosure
from streak_quest.services.errors import NotFound, SettlementAlreadyDone, SettlementError
from streak_quest.services.ranking import LeaderboardEntry

logger = logging.getLogger(__name__)


class SettlementHandler(Protocol):
    async def settle(
        self,
        db: AsyncSession,
        week: int,
        ranked_players: Sequence[LeaderboardEntry],
        pool: int,
    ) -> WeekClosure: ...


class PayoutPlan(NamedTuple):
    shares: list[tuple[int, str, int]]  # (rank, address, amount)
    remainder: int


def plan_payouts(
    ranked_players: Sequence[LeaderboardEntry],
    pool: int,
    top_percent: int,
    pool_percent: int,
) -> PayoutPlan:
    """Equal shares of ``pool_percent`` of the pool for the top ``top_percent`` of players.

    At least one winner when anyone is ranked. Integer division dust and the
    undistributed share stay with the treasury as the remainder.
    """
    if pool < 0:
        raise SettlementError(f"Negative prize pool {pool}")
    if not ranked_players or pool == 0:
        return PayoutPlan(shares=[], remainder=pool)

    winners = max(1, len(ranked_players) * top_percent // 100)
    share = pool * pool_percent // 100 // winners
    shares = [
        (rank, entry.address, share)
        for rank, entry in enumerate(ranked_players[:winners], start=1)
    ]
    paid = share * len(shares)
    if paid > pool:
        raise SettlementError(f"Payout total {paid} exceeds pool {pool}")
    return PayoutPlan(shares=shares, remainder=pool - paid)


class TreasuryService:
    def __init__(self, top_percent: int, pool_percent: int, treasury_address: str):
        self.top_percent = top_percent
        self.pool_percent = pool_percent
        self.treasury_address = treasury_address.lower()

    async def settle(
        self,
        db: AsyncSession,
        week: int,
        ranked_players: Sequence[LeaderboardEntry],
        pool: int,
    ) -> WeekClosure:
        """Record payouts for a closed week. One attempt per week.

        The payout plan is validated before anything is written, so a failed
        attempt only flags the closure and leaves balances untouched.
        """
        closure = await crud_week_closure.get_by_week(db, week)
        if closure is None:
            raise NotFound(f"Week {week} has not been closed")
        if closure.status != ClosureStatus.pending:
            raise SettlementAlreadyDone(
                f"Week {week} settlement already attempted ({closure.status.value})"
            )

        try:
            plan = plan_payouts(ranked_players, pool, self.top_percent, self.pool_percent)
        except SettlementError as exc:
            closure.status = ClosureStatus.failed
            closure.failure_reason = str(exc)[:500]
            await db.flush()
            logger.warning("Settlement for week %d failed: %s", week, exc)
            raise

        for rank, address, amount in plan.shares:
            db.add(
                Payout(
                    closure_id=closure.id,
                    week=week,
                    address=address,
                    rank=rank,
                    amount=amount,
                )
            )
        closure.settled_amount = pool - plan.remainder
        closure.treasury_remainder = plan.remainder
        closure.status = ClosureStatus.settled
        await db.flush()
        await db.refresh(closure, attribute_names=["payouts"])
        logger.info(
            "Week %d settled: %d winner(s), %d wei paid, %d wei to treasury %s",
            week,
            len(plan.shares),
            closure.settled_amount,
            plan.remainder,
            self.treasury_address,
        )
        return closure


def get_treasury() -> TreasuryService:
    settings = get_settings()
    return TreasuryService(
        top_percent=settings.PAYOUT_TOP_PERCENT,
        pool_percent=settings.PAYOUT_POOL_PERCENT,
        treasury_address=settings.TREASURY_ADDRESS,
    )
