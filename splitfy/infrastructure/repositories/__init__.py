"""Repository implementations."""

from .activity_repository import ActivityRepository
from .contract_repository import ContractRepository, ContractTemplateRepository
from .match_repository import MatchRepository
from .message_repository import MessageRepository
from .negotiation_repository import NegotiationRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "ContractRepository",
    "ContractTemplateRepository",
    "MatchRepository",
    "MessageRepository",
    "NegotiationRepository",
    "NotificationRepository",
    "UserRepository",
]
