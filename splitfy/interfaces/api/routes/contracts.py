"""Routes for contracts, their templates, collaborators and signatures."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from splitfy.application.use_cases.contracts import (
    add_collaborator as add_collaborator_uc,
    create_contract as create_contract_uc,
    delete_contract as delete_contract_uc,
    get_contract as get_contract_uc,
    get_dashboard_stats,
    get_template as get_template_uc,
    list_collaborators as list_collaborators_uc,
    list_contracts as list_contracts_uc,
    list_signatures as list_signatures_uc,
    list_templates as list_templates_uc,
    sign_contract as sign_contract_uc,
    update_contract as update_contract_uc,
)
from splitfy.domain.entities import User
from splitfy.infrastructure.database import get_db
from splitfy.interfaces.api.dependencies import get_current_active_user
from splitfy.interfaces.api.routes_helpers import client_details, http_error_from
from splitfy.interfaces.api.schemas import (
    CollaboratorCreate,
    CollaboratorRead,
    ContractCreate,
    ContractRead,
    ContractTemplateRead,
    ContractUpdate,
    DashboardStatsRead,
    SignatureCreate,
    SignatureRead,
)

router = APIRouter(tags=["contracts"])


@router.get("/contract-templates", response_model=list[ContractTemplateRead])
def list_templates(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
):
    return [ContractTemplateRead.model_validate(t) for t in list_templates_uc(db)]


@router.get("/contract-templates/{template_id}", response_model=ContractTemplateRead)
def read_template(
    template_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
):
    try:
        template = get_template_uc(db, template_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ContractTemplateRead.model_validate(template)


@router.get("/contracts", response_model=list[ContractRead])
def list_contracts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the contracts created by or shared with the caller."""

    contracts = list_contracts_uc(db, user_id=current_user.id)
    return [ContractRead.model_validate(contract) for contract in contracts]


@router.post("/contracts", response_model=ContractRead, status_code=status.HTTP_201_CREATED)
def create_contract(
    payload: ContractCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        contract = create_contract_uc(
            db,
            created_by=current_user.id,
            title=payload.title,
            type=payload.type,
            data=payload.data,
            template_id=payload.template_id,
            status=payload.status,
            metadata=payload.metadata,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ContractRead.model_validate(contract)


@router.get("/contracts/{contract_id}", response_model=ContractRead)
def read_contract(
    contract_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        contract = get_contract_uc(db, contract_id=contract_id, user_id=current_user.id)
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return ContractRead.model_validate(contract)


@router.patch("/contracts/{contract_id}", response_model=ContractRead)
def update_contract(
    contract_id: int,
    payload: ContractUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        contract = update_contract_uc(
            db,
            contract_id=contract_id,
            user_id=current_user.id,
            **payload.model_dump(exclude_unset=True),
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return ContractRead.model_validate(contract)


@router.delete("/contracts/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contract(
    contract_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    try:
        delete_contract_uc(db, contract_id=contract_id, user_id=current_user.id)
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/contracts/{contract_id}/collaborators", response_model=list[CollaboratorRead]
)
def list_collaborators(
    contract_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        collaborators = list_collaborators_uc(
            db, contract_id=contract_id, user_id=current_user.id
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return [CollaboratorRead.model_validate(c) for c in collaborators]


@router.post(
    "/contracts/{contract_id}/collaborators",
    response_model=CollaboratorRead,
    status_code=status.HTTP_201_CREATED,
)
def add_collaborator(
    contract_id: int,
    payload: CollaboratorCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Invite a collaborator to the contract."""

    try:
        collaborator = add_collaborator_uc(
            db,
            contract_id=contract_id,
            requested_by=current_user.id,
            name=payload.name,
            role=payload.role,
            user_id=payload.user_id,
            email=str(payload.email) if payload.email else None,
            ownership_percentage=payload.ownership_percentage,
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return CollaboratorRead.model_validate(collaborator)


@router.get("/contracts/{contract_id}/signatures", response_model=list[SignatureRead])
def list_signatures(
    contract_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        signatures = list_signatures_uc(db, contract_id=contract_id, user_id=current_user.id)
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return [SignatureRead.model_validate(signature) for signature in signatures]


@router.post(
    "/contracts/{contract_id}/signatures",
    response_model=SignatureRead,
    status_code=status.HTTP_201_CREATED,
)
def sign_contract(
    contract_id: int,
    payload: SignatureCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Record a signature, closing the contract once every party signed."""

    ip_address, user_agent = client_details(request)
    try:
        signature = sign_contract_uc(
            db,
            contract_id=contract_id,
            collaborator_id=payload.collaborator_id,
            user_id=current_user.id,
            signature_data=payload.signature_data,
            ip_address=ip_address,
            user_agent=user_agent,
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return SignatureRead.model_validate(signature)


@router.get("/dashboard/stats", response_model=DashboardStatsRead)
def read_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    return DashboardStatsRead.model_validate(get_dashboard_stats(db, user_id=current_user.id))


__all__ = ["router"]
