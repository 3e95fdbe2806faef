"""SQLAlchemy models for contracts and the parties that sign them."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from splitfy.infrastructure.database import Base
from splitfy.utils import now_in_app_naive_datetime


class ContractTemplateModel(Base):
    """Database representation of a contract template."""

    __tablename__ = "contract_template"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    template = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


class ContractModel(Base):
    """Database representation of a contract."""

    __tablename__ = "contract"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    type = Column(String(50), nullable=False)
    template_id = Column(Integer, ForeignKey("contract_template.id"), nullable=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="draft")
    data = Column(JSON, nullable=False, default=dict)
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    collaborators = relationship(
        "ContractCollaboratorModel",
        back_populates="contract",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="ContractCollaboratorModel.id",
    )


class ContractCollaboratorModel(Base):
    """Database representation of a contract collaborator."""

    __tablename__ = "contract_collaborator"

    id = Column(Integer, primary_key=True, index=True)
    contract_id = Column(
        Integer, ForeignKey("contract.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("user.id"), nullable=True, index=True)
    email = Column(String(255), nullable=True)
    name = Column(String(200), nullable=False)
    role = Column(String(100), nullable=False)
    ownership_percentage = Column(Numeric(5, 2), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    signed_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    contract = relationship("ContractModel", back_populates="collaborators")


class ContractSignatureModel(Base):
    """Database representation of a collaborator signature."""

    __tablename__ = "contract_signature"

    id = Column(Integer, primary_key=True, index=True)
    contract_id = Column(
        Integer, ForeignKey("contract.id", ondelete="CASCADE"), nullable=False, index=True
    )
    collaborator_id = Column(
        Integer,
        ForeignKey("contract_collaborator.id", ondelete="CASCADE"),
        nullable=False,
    )
    signature_data = Column(Text, nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    signed_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = [
    "ContractTemplateModel",
    "ContractModel",
    "ContractCollaboratorModel",
    "ContractSignatureModel",
]
