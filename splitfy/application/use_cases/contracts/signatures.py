"""Use cases for signing contracts."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from splitfy.domain.entities import (
    ACTIVITY_CONTRACT_SIGNED,
    COLLABORATOR_STATUS_SIGNED,
    CONTRACT_STATUS_CANCELLED,
    CONTRACT_STATUS_PENDING,
    CONTRACT_STATUS_SIGNED,
    ContractSignature,
    UserActivity,
)
from splitfy.infrastructure.repositories import ActivityRepository, ContractRepository
from splitfy.utils import now_in_app_timezone

from ..notifications import notify_user
from .contracts import get_visible_contract

logger = logging.getLogger(__name__)


def list_signatures(
    session: Session, *, contract_id: int, user_id: int
) -> Sequence[ContractSignature]:
    repository = ContractRepository(session)
    get_visible_contract(repository, contract_id, user_id)
    return repository.list_signatures(contract_id)


def sign_contract(
    session: Session,
    *,
    contract_id: int,
    collaborator_id: int,
    user_id: int,
    signature_data: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> ContractSignature:
    """Record the signature of ``collaborator_id``.

    Registered collaborators sign for themselves; the contract creator signs
    on behalf of collaborators without an account. The contract becomes
    ``signed`` once every collaborator signed.
    """

    repository = ContractRepository(session)
    contract = get_visible_contract(repository, contract_id, user_id)
    if contract.status in (CONTRACT_STATUS_SIGNED, CONTRACT_STATUS_CANCELLED):
        raise ValueError("The contract can no longer be signed")

    collaborator = next(
        (c for c in contract.collaborators if c.id == collaborator_id), None
    )
    if collaborator is None:
        raise ValueError("Collaborator not found")
    if collaborator.user_id is not None:
        if collaborator.user_id != user_id:
            raise PermissionError("Only the collaborator can sign for themselves")
    elif contract.created_by != user_id:
        raise PermissionError("Only the creator can sign for an unregistered collaborator")
    if collaborator.status == COLLABORATOR_STATUS_SIGNED:
        raise ValueError("The collaborator already signed this contract")

    signature = repository.record_signature(
        ContractSignature(
            id=None,
            contract_id=contract_id,
            collaborator_id=collaborator_id,
            signature_data=signature_data,
            ip_address=ip_address,
            user_agent=user_agent,
        ),
        signed_at=now_in_app_timezone(),
    )
    ActivityRepository(session).create(
        UserActivity(
            id=None,
            user_id=user_id,
            activity_type=ACTIVITY_CONTRACT_SIGNED,
            activity_data={"contractId": contract_id, "collaboratorId": collaborator_id},
            ip_address=ip_address,
            user_agent=user_agent,
        )
    )

    collaborators = repository.list_collaborators(contract_id)
    if all(c.status == COLLABORATOR_STATUS_SIGNED for c in collaborators):
        repository.update(replace(contract, status=CONTRACT_STATUS_SIGNED))
        logger.info("Contract %s fully signed", contract_id)
        notify_user(
            session,
            user_id=contract.created_by,
            title="Contract signed",
            content=f"Every collaborator signed \"{contract.title}\".",
            type="success",
            action_url=f"/contracts/{contract_id}",
        )
    elif contract.status != CONTRACT_STATUS_PENDING:
        repository.update(replace(contract, status=CONTRACT_STATUS_PENDING))
    return signature


__all__ = ["list_signatures", "sign_contract"]
