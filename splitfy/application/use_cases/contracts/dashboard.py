"""Dashboard summary of the caller's contracts."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from splitfy.domain.entities import CONTRACT_STATUS_PENDING, CONTRACT_STATUS_SIGNED
from splitfy.infrastructure.repositories import ContractRepository
from splitfy.utils import ensure_app_timezone, now_in_app_timezone

REVENUE_PER_SIGNED_CONTRACT = 100


@dataclass(frozen=True)
class DashboardStats:
    total_contracts: int
    pending_signatures: int
    completed_this_month: int
    revenue_split: int


def get_dashboard_stats(session: Session, *, user_id: int) -> DashboardStats:
    contracts = ContractRepository(session).list_visible_to(user_id)
    now = now_in_app_timezone()
    signed = [c for c in contracts if c.status == CONTRACT_STATUS_SIGNED]
    completed_this_month = 0
    for contract in signed:
        updated_at = ensure_app_timezone(contract.updated_at)
        if updated_at and (updated_at.year, updated_at.month) == (now.year, now.month):
            completed_this_month += 1
    return DashboardStats(
        total_contracts=len(contracts),
        pending_signatures=sum(1 for c in contracts if c.status == CONTRACT_STATUS_PENDING),
        completed_this_month=completed_this_month,
        revenue_split=len(signed) * REVENUE_PER_SIGNED_CONTRACT,
    )


__all__ = ["DashboardStats", "get_dashboard_stats"]
