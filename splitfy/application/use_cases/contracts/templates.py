"""Use cases for contract templates."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from splitfy.domain.entities import ContractTemplate
from splitfy.infrastructure.repositories import ContractTemplateRepository

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES: tuple[dict[str, Any], ...] = (
    {
        "name": "Split Sheet",
        "type": "split-sheet",
        "description": "Songwriting and publishing ownership split between collaborators.",
        "template": {
            "fields": ["title", "releaseDate", "collaborators"],
            "royalties": {"performanceRoyalties": "equal", "mechanicalRoyalties": "equal"},
        },
    },
    {
        "name": "Performance Agreement",
        "type": "performance",
        "description": "Terms for a live performance between an artist and a venue.",
        "template": {"fields": ["title", "venue", "eventDate", "fee", "setLength"]},
    },
    {
        "name": "Producer Agreement",
        "type": "producer",
        "description": "Fees, points and credit for a record producer.",
        "template": {"fields": ["title", "producerFee", "royaltyPoints", "credit"]},
    },
    {
        "name": "Management Agreement",
        "type": "management",
        "description": "Commission and term of an artist management relationship.",
        "template": {"fields": ["term", "commissionRate", "territory"]},
    },
)


def list_templates(session: Session) -> Sequence[ContractTemplate]:
    return ContractTemplateRepository(session).list_active()


def get_template(session: Session, template_id: int) -> ContractTemplate:
    template = ContractTemplateRepository(session).get(template_id)
    if template is None:
        raise ValueError("Template not found")
    return template


def seed_default_templates(session: Session) -> list[ContractTemplate]:
    """Install the standard templates whose type is not present yet."""

    repository = ContractTemplateRepository(session)
    created: list[ContractTemplate] = []
    for definition in DEFAULT_TEMPLATES:
        if repository.get_by_type(definition["type"]) is not None:
            logger.info("Template for %s already present", definition["type"])
            continue
        created.append(
            repository.create(
                ContractTemplate(
                    id=None,
                    name=definition["name"],
                    type=definition["type"],
                    description=definition["description"],
                    template=definition["template"],
                )
            )
        )
    return created


__all__ = ["DEFAULT_TEMPLATES", "list_templates", "get_template", "seed_default_templates"]
