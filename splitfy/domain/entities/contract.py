"""Domain entities for contracts, their collaborators and signatures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

CONTRACT_TYPES: frozenset[str] = frozenset(
    {"split-sheet", "performance", "producer", "management"}
)

CONTRACT_STATUS_DRAFT = "draft"
CONTRACT_STATUS_PENDING = "pending"
CONTRACT_STATUS_SIGNED = "signed"
CONTRACT_STATUS_CANCELLED = "cancelled"

CONTRACT_STATUSES: frozenset[str] = frozenset(
    {
        CONTRACT_STATUS_DRAFT,
        CONTRACT_STATUS_PENDING,
        CONTRACT_STATUS_SIGNED,
        CONTRACT_STATUS_CANCELLED,
    }
)

COLLABORATOR_STATUS_PENDING = "pending"
COLLABORATOR_STATUS_SIGNED = "signed"
COLLABORATOR_STATUS_DECLINED = "declined"


@dataclass
class ContractTemplate:
    """Reusable structure for a kind of contract."""

    id: int | None
    name: str
    type: str
    template: dict[str, Any]
    description: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ContractCollaborator:
    """A party to a contract, registered or invited by e-mail."""

    id: int | None
    contract_id: int
    name: str
    role: str
    user_id: int | None = None
    email: str | None = None
    ownership_percentage: Decimal | None = None
    status: str = COLLABORATOR_STATUS_PENDING
    signed_at: datetime | None = None
    created_at: datetime | None = None


@dataclass
class ContractSignature:
    """A recorded signature of a collaborator."""

    id: int | None
    contract_id: int
    collaborator_id: int
    signature_data: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    signed_at: datetime | None = None


@dataclass
class Contract:
    """A contract created by a user."""

    id: int | None
    title: str
    type: str
    created_by: int
    data: dict[str, Any]
    status: str = CONTRACT_STATUS_DRAFT
    template_id: int | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    collaborators: list[ContractCollaborator] = field(default_factory=list)

    def is_visible_to(self, user_id: int) -> bool:
        """Return ``True`` when ``user_id`` created the contract or collaborates on it."""

        if self.created_by == user_id:
            return True
        return any(collaborator.user_id == user_id for collaborator in self.collaborators)


__all__ = [
    "Contract",
    "ContractTemplate",
    "ContractCollaborator",
    "ContractSignature",
    "CONTRACT_TYPES",
    "CONTRACT_STATUSES",
    "CONTRACT_STATUS_DRAFT",
    "CONTRACT_STATUS_PENDING",
    "CONTRACT_STATUS_SIGNED",
    "CONTRACT_STATUS_CANCELLED",
    "COLLABORATOR_STATUS_PENDING",
    "COLLABORATOR_STATUS_SIGNED",
    "COLLABORATOR_STATUS_DECLINED",
]
