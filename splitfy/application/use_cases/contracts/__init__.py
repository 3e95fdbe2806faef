"""Use cases for contracts, templates, collaborators and signatures."""

from .collaborators import add_collaborator, list_collaborators
from .contracts import (
    create_contract,
    delete_contract,
    get_contract,
    list_contracts,
    update_contract,
)
from .dashboard import DashboardStats, get_dashboard_stats
from .signatures import list_signatures, sign_contract
from .templates import (
    DEFAULT_TEMPLATES,
    get_template,
    list_templates,
    seed_default_templates,
)

__all__ = [
    "add_collaborator",
    "list_collaborators",
    "create_contract",
    "delete_contract",
    "get_contract",
    "list_contracts",
    "update_contract",
    "DashboardStats",
    "get_dashboard_stats",
    "list_signatures",
    "sign_contract",
    "DEFAULT_TEMPLATES",
    "get_template",
    "list_templates",
    "seed_default_templates",
]
