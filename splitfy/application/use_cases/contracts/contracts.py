"""Use cases for creating and maintaining contracts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from splitfy.domain.entities import (
    CONTRACT_STATUS_DRAFT,
    CONTRACT_STATUSES,
    CONTRACT_TYPES,
    Contract,
)
from splitfy.infrastructure.repositories import (
    ContractRepository,
    ContractTemplateRepository,
)

MAX_TITLE_LENGTH = 200


def _validate_title(title: str | None) -> str:
    value = (title or "").strip()
    if not value:
        raise ValueError("The contract title is required")
    if len(value) > MAX_TITLE_LENGTH:
        raise ValueError(f"The title cannot exceed {MAX_TITLE_LENGTH} characters")
    return value


def get_visible_contract(
    repository: ContractRepository, contract_id: int, user_id: int
) -> Contract:
    contract = repository.get(contract_id)
    if contract is None:
        raise ValueError("Contract not found")
    if not contract.is_visible_to(user_id):
        raise PermissionError("You do not have access to this contract")
    return contract


def get_owned_contract(
    repository: ContractRepository, contract_id: int, user_id: int
) -> Contract:
    contract = get_visible_contract(repository, contract_id, user_id)
    if contract.created_by != user_id:
        raise PermissionError("Only the creator can modify this contract")
    return contract


def list_contracts(session: Session, *, user_id: int) -> Sequence[Contract]:
    return ContractRepository(session).list_visible_to(user_id)


def get_contract(session: Session, *, contract_id: int, user_id: int) -> Contract:
    return get_visible_contract(ContractRepository(session), contract_id, user_id)


def create_contract(
    session: Session,
    *,
    created_by: int,
    title: str,
    type: str,
    data: dict[str, Any],
    template_id: int | None = None,
    status: str = CONTRACT_STATUS_DRAFT,
    metadata: dict[str, Any] | None = None,
) -> Contract:
    if type not in CONTRACT_TYPES:
        raise ValueError(f"Unsupported contract type: {type}")
    if status not in CONTRACT_STATUSES:
        raise ValueError(f"Unsupported contract status: {status}")
    if template_id is not None:
        template = ContractTemplateRepository(session).get(template_id)
        if template is None:
            raise ValueError("Template not found")
        if template.type != type:
            raise ValueError("The template does not match the contract type")

    return ContractRepository(session).create(
        Contract(
            id=None,
            title=_validate_title(title),
            type=type,
            created_by=created_by,
            data=dict(data or {}),
            status=status,
            template_id=template_id,
            metadata=metadata,
        )
    )


def update_contract(
    session: Session,
    *,
    contract_id: int,
    user_id: int,
    title: str | None = None,
    status: str | None = None,
    data: dict[str, Any] | None = None,
    metadata: dict[str, Any] | None = None,
) -> Contract:
    repository = ContractRepository(session)
    contract = get_owned_contract(repository, contract_id, user_id)
    if status is not None and status not in CONTRACT_STATUSES:
        raise ValueError(f"Unsupported contract status: {status}")

    updated = replace(
        contract,
        title=_validate_title(title) if title is not None else contract.title,
        status=status or contract.status,
        data=dict(data) if data is not None else contract.data,
        metadata=metadata if metadata is not None else contract.metadata,
    )
    return repository.update(updated)


def delete_contract(session: Session, *, contract_id: int, user_id: int) -> None:
    repository = ContractRepository(session)
    get_owned_contract(repository, contract_id, user_id)
    repository.delete(contract_id)


__all__ = [
    "list_contracts",
    "get_contract",
    "create_contract",
    "update_contract",
    "delete_contract",
    "get_visible_contract",
    "get_owned_contract",
]
