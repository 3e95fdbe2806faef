"""Use cases for the parties of a contract."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy.orm import Session

from splitfy.domain.entities import (
    COLLABORATOR_STATUS_PENDING,
    CONTRACT_STATUS_CANCELLED,
    CONTRACT_STATUS_SIGNED,
    ContractCollaborator,
)
from splitfy.infrastructure.email import send_contract_invitation_email
from splitfy.infrastructure.repositories import ContractRepository, UserRepository

from ..notifications import notify_user
from .contracts import get_owned_contract, get_visible_contract

logger = logging.getLogger(__name__)

MAX_TOTAL_OWNERSHIP = Decimal("100")


def list_collaborators(
    session: Session, *, contract_id: int, user_id: int
) -> Sequence[ContractCollaborator]:
    repository = ContractRepository(session)
    get_visible_contract(repository, contract_id, user_id)
    return repository.list_collaborators(contract_id)


def add_collaborator(
    session: Session,
    *,
    contract_id: int,
    requested_by: int,
    name: str,
    role: str,
    user_id: int | None = None,
    email: str | None = None,
    ownership_percentage: Decimal | None = None,
) -> ContractCollaborator:
    """Add a collaborator, invite them by e-mail and notify registered users."""

    repository = ContractRepository(session)
    contract = get_owned_contract(repository, contract_id, requested_by)
    if contract.status in (CONTRACT_STATUS_SIGNED, CONTRACT_STATUS_CANCELLED):
        raise ValueError("Collaborators cannot be added to a closed contract")

    name = (name or "").strip()
    role = (role or "").strip()
    if not name:
        raise ValueError("The collaborator name is required")
    if not role:
        raise ValueError("The collaborator role is required")

    user_repository = UserRepository(session)
    collaborator_user = None
    if user_id is not None:
        collaborator_user = user_repository.get(user_id)
        if collaborator_user is None:
            raise ValueError("Collaborator user not found")
        email = email or collaborator_user.email
    elif email:
        collaborator_user = user_repository.get_by_email(email)
        if collaborator_user is not None:
            user_id = collaborator_user.id

    if user_id is not None and any(c.user_id == user_id for c in contract.collaborators):
        raise ValueError("The user already collaborates on this contract")

    if ownership_percentage is not None:
        ownership_percentage = Decimal(ownership_percentage)
        if ownership_percentage < 0 or ownership_percentage > MAX_TOTAL_OWNERSHIP:
            raise ValueError("ownership_percentage must be between 0 and 100")
        allocated = sum(
            (c.ownership_percentage or Decimal("0") for c in contract.collaborators),
            Decimal("0"),
        )
        if allocated + ownership_percentage > MAX_TOTAL_OWNERSHIP:
            raise ValueError(
                f"Total ownership would exceed 100% ({allocated + ownership_percentage}%)"
            )

    collaborator = repository.add_collaborator(
        ContractCollaborator(
            id=None,
            contract_id=contract_id,
            name=name,
            role=role,
            user_id=user_id,
            email=email,
            ownership_percentage=ownership_percentage,
            status=COLLABORATOR_STATUS_PENDING,
        )
    )

    inviter = user_repository.get(requested_by)
    inviter_name = inviter.display_name if inviter else "A Splitfy user"
    if email and not send_contract_invitation_email(
        email,
        collaborator_name=name,
        contract_title=contract.title,
        inviter_name=inviter_name,
        role=role,
    ):
        logger.info("Invitation e-mail for collaborator %s was not sent", collaborator.id)

    if user_id is not None:
        notify_user(
            session,
            user_id=user_id,
            title="Contract invitation",
            content=f"{inviter_name} added you to \"{contract.title}\" as {role}.",
            action_url=f"/contracts/{contract_id}",
        )
    return collaborator


__all__ = ["list_collaborators", "add_collaborator", "MAX_TOTAL_OWNERSHIP"]
