"""Schemas for contracts, templates, collaborators and signatures."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

ContractType = Literal["split-sheet", "performance", "producer", "management"]
ContractStatus = Literal["draft", "pending", "signed", "cancelled"]


class ContractTemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    description: str | None
    template: dict[str, Any]
    is_active: bool
    created_at: datetime | None


class CollaboratorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=100)
    user_id: int | None = Field(default=None, ge=1)
    email: EmailStr | None = None
    ownership_percentage: Decimal | None = Field(
        default=None, ge=0, le=100, max_digits=5, decimal_places=2
    )


class CollaboratorRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_id: int
    user_id: int | None
    email: str | None
    name: str
    role: str
    ownership_percentage: Decimal | None
    status: str
    signed_at: datetime | None
    created_at: datetime | None


class ContractCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    type: ContractType
    template_id: int | None = None
    status: ContractStatus = "draft"
    data: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] | None = None


class ContractUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    status: ContractStatus | None = None
    data: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None


class ContractRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    type: str
    template_id: int | None
    created_by: int
    status: str
    data: dict[str, Any]
    metadata: dict[str, Any] | None
    created_at: datetime | None
    updated_at: datetime | None
    collaborators: list[CollaboratorRead] = Field(default_factory=list)


class SignatureCreate(BaseModel):
    collaborator_id: int = Field(..., ge=1)
    signature_data: str | None = None


class SignatureRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_id: int
    collaborator_id: int
    signature_data: str | None
    ip_address: str | None
    user_agent: str | None
    signed_at: datetime | None


class DashboardStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_contracts: int
    pending_signatures: int
    completed_this_month: int
    revenue_split: int


__all__ = [
    "ContractType",
    "ContractStatus",
    "ContractTemplateRead",
    "CollaboratorCreate",
    "CollaboratorRead",
    "ContractCreate",
    "ContractUpdate",
    "ContractRead",
    "SignatureCreate",
    "SignatureRead",
    "DashboardStatsRead",
]
