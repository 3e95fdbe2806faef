"""Persistence helpers for contracts, templates, collaborators and signatures."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from sqlalchemy import or_
from sqlalchemy.orm import Session

from splitfy.domain.entities import (
    Contract,
    ContractCollaborator,
    ContractSignature,
    ContractTemplate,
)
from splitfy.infrastructure.models import (
    ContractCollaboratorModel,
    ContractModel,
    ContractSignatureModel,
    ContractTemplateModel,
)
from splitfy.utils import ensure_app_naive_datetime, ensure_app_timezone


class ContractTemplateRepository:
    """Read and seed contract templates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active(self) -> Sequence[ContractTemplate]:
        query = (
            self.session.query(ContractTemplateModel)
            .filter(ContractTemplateModel.is_active.is_(True))
            .order_by(ContractTemplateModel.name)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, template_id: int) -> ContractTemplate | None:
        model = self.session.get(ContractTemplateModel, template_id)
        return self._to_entity(model) if model else None

    def get_by_type(self, contract_type: str) -> ContractTemplate | None:
        model = (
            self.session.query(ContractTemplateModel)
            .filter(ContractTemplateModel.type == contract_type)
            .order_by(ContractTemplateModel.id)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, template: ContractTemplate) -> ContractTemplate:
        model = ContractTemplateModel(
            name=template.name,
            type=template.type,
            description=template.description,
            template=dict(template.template),
            is_active=template.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ContractTemplateModel) -> ContractTemplate:
        return ContractTemplate(
            id=model.id,
            name=model.name,
            type=model.type,
            description=model.description,
            template=dict(model.template or {}),
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


class ContractRepository:
    """Provide CRUD operations for contracts and their parties."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, contract_id: int) -> Contract | None:
        model = self.session.get(ContractModel, contract_id)
        return self._to_entity(model) if model else None

    def list_visible_to(self, user_id: int) -> Sequence[Contract]:
        """Return contracts created by ``user_id`` or listing them as collaborator."""

        collaborating = (
            self.session.query(ContractCollaboratorModel.contract_id)
            .filter(ContractCollaboratorModel.user_id == user_id)
            .scalar_subquery()
        )
        query = (
            self.session.query(ContractModel)
            .filter(
                or_(
                    ContractModel.created_by == user_id,
                    ContractModel.id.in_(collaborating),
                )
            )
            .order_by(ContractModel.created_at.desc(), ContractModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, contract: Contract) -> Contract:
        model = ContractModel()
        self._apply_entity_to_model(model, contract)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, contract: Contract) -> Contract:
        model = self.session.get(ContractModel, contract.id) if contract.id is not None else None
        if model is None:
            msg = f"Contract with id {contract.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, contract)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, contract_id: int) -> None:
        model = self.session.get(ContractModel, contract_id)
        if model is None:
            msg = f"Contract with id {contract_id} not found"
            raise ValueError(msg)
        self.session.query(ContractSignatureModel).filter(
            ContractSignatureModel.contract_id == contract_id
        ).delete(synchronize_session=False)
        self.session.delete(model)
        self.session.commit()

    def list_collaborators(self, contract_id: int) -> Sequence[ContractCollaborator]:
        query = (
            self.session.query(ContractCollaboratorModel)
            .filter(ContractCollaboratorModel.contract_id == contract_id)
            .order_by(ContractCollaboratorModel.id)
        )
        return [self._collaborator_to_entity(model) for model in query.all()]

    def add_collaborator(self, collaborator: ContractCollaborator) -> ContractCollaborator:
        model = ContractCollaboratorModel(
            contract_id=collaborator.contract_id,
            user_id=collaborator.user_id,
            email=collaborator.email,
            name=collaborator.name,
            role=collaborator.role,
            ownership_percentage=collaborator.ownership_percentage,
            status=collaborator.status,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._collaborator_to_entity(model)

    def list_signatures(self, contract_id: int) -> Sequence[ContractSignature]:
        query = (
            self.session.query(ContractSignatureModel)
            .filter(ContractSignatureModel.contract_id == contract_id)
            .order_by(ContractSignatureModel.signed_at, ContractSignatureModel.id)
        )
        return [self._signature_to_entity(model) for model in query.all()]

    def record_signature(
        self, signature: ContractSignature, *, signed_at: datetime
    ) -> ContractSignature:
        """Store ``signature`` and mark its collaborator as signed in one transaction."""

        collaborator = self.session.get(
            ContractCollaboratorModel, signature.collaborator_id
        )
        if collaborator is None:
            msg = f"Collaborator with id {signature.collaborator_id} not found"
            raise ValueError(msg)
        naive_signed_at = ensure_app_naive_datetime(signed_at)
        model = ContractSignatureModel(
            contract_id=signature.contract_id,
            collaborator_id=signature.collaborator_id,
            signature_data=signature.signature_data,
            ip_address=signature.ip_address,
            user_agent=signature.user_agent,
            signed_at=naive_signed_at,
        )
        collaborator.status = "signed"
        collaborator.signed_at = naive_signed_at
        self.session.add_all([model, collaborator])
        self.session.commit()
        self.session.refresh(model)
        return self._signature_to_entity(model)

    def _apply_entity_to_model(self, model: ContractModel, contract: Contract) -> None:
        model.title = contract.title
        model.type = contract.type
        model.template_id = contract.template_id
        model.created_by = contract.created_by
        model.status = contract.status
        model.data = dict(contract.data or {})
        model.extra_metadata = contract.metadata

    @classmethod
    def _to_entity(cls, model: ContractModel) -> Contract:
        return Contract(
            id=model.id,
            title=model.title,
            type=model.type,
            template_id=model.template_id,
            created_by=model.created_by,
            status=model.status,
            data=dict(model.data or {}),
            metadata=model.extra_metadata,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            collaborators=[
                cls._collaborator_to_entity(collaborator)
                for collaborator in model.collaborators
            ],
        )

    @staticmethod
    def _collaborator_to_entity(model: ContractCollaboratorModel) -> ContractCollaborator:
        return ContractCollaborator(
            id=model.id,
            contract_id=model.contract_id,
            user_id=model.user_id,
            email=model.email,
            name=model.name,
            role=model.role,
            ownership_percentage=Decimal(model.ownership_percentage)
            if model.ownership_percentage is not None
            else None,
            status=model.status,
            signed_at=ensure_app_timezone(model.signed_at),
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _signature_to_entity(model: ContractSignatureModel) -> ContractSignature:
        return ContractSignature(
            id=model.id,
            contract_id=model.contract_id,
            collaborator_id=model.collaborator_id,
            signature_data=model.signature_data,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            signed_at=ensure_app_timezone(model.signed_at),
        )


__all__ = ["ContractRepository", "ContractTemplateRepository"]
