"""Domain entities exposed by the application."""

from .activity import (
    ACTIVITY_CONTRACT_SIGNED,
    ACTIVITY_LOGIN,
    ACTIVITY_MESSAGE_SENT,
    BATCH_UNLOAD_ACTIVITY_TYPE,
    IMMEDIATE_ACTIVITY_TYPES,
    ActivityEvent,
    ProfileView,
    UserActivity,
)
from .contract import (
    COLLABORATOR_STATUS_DECLINED,
    COLLABORATOR_STATUS_PENDING,
    COLLABORATOR_STATUS_SIGNED,
    CONTRACT_STATUS_CANCELLED,
    CONTRACT_STATUS_DRAFT,
    CONTRACT_STATUS_PENDING,
    CONTRACT_STATUS_SIGNED,
    CONTRACT_STATUSES,
    CONTRACT_TYPES,
    Contract,
    ContractCollaborator,
    ContractSignature,
    ContractTemplate,
)
from .match import (
    MATCH_STATUS_CONNECTED,
    MATCH_STATUS_DISMISSED,
    MATCH_STATUS_SUGGESTED,
    MATCH_STATUSES,
    CandidateScore,
    UserMatch,
)
from .message import MESSAGE_TYPES, Conversation, Message
from .negotiation import (
    NEGOTIATION_MESSAGE_AI_SUGGESTION,
    NEGOTIATION_MESSAGE_SYSTEM,
    NEGOTIATION_MESSAGE_TEXT,
    NEGOTIATION_STATUS_ACTIVE,
    NEGOTIATION_STATUS_CANCELLED,
    NEGOTIATION_STATUS_COMPLETED,
    NEGOTIATION_STATUSES,
    Negotiation,
    NegotiationAnalysis,
    NegotiationMessage,
)
from .notification import NOTIFICATION_TYPES, Notification
from .user import ROLE_ADMIN, ROLE_USER, SUBSCRIPTION_TIER_FREE, User

__all__ = [
    "ActivityEvent",
    "UserActivity",
    "ProfileView",
    "IMMEDIATE_ACTIVITY_TYPES",
    "BATCH_UNLOAD_ACTIVITY_TYPE",
    "ACTIVITY_LOGIN",
    "ACTIVITY_MESSAGE_SENT",
    "ACTIVITY_CONTRACT_SIGNED",
    "Contract",
    "ContractTemplate",
    "ContractCollaborator",
    "ContractSignature",
    "CONTRACT_TYPES",
    "CONTRACT_STATUSES",
    "CONTRACT_STATUS_DRAFT",
    "CONTRACT_STATUS_PENDING",
    "CONTRACT_STATUS_SIGNED",
    "CONTRACT_STATUS_CANCELLED",
    "COLLABORATOR_STATUS_PENDING",
    "COLLABORATOR_STATUS_SIGNED",
    "COLLABORATOR_STATUS_DECLINED",
    "CandidateScore",
    "UserMatch",
    "MATCH_STATUSES",
    "MATCH_STATUS_SUGGESTED",
    "MATCH_STATUS_CONNECTED",
    "MATCH_STATUS_DISMISSED",
    "Message",
    "Conversation",
    "MESSAGE_TYPES",
    "Negotiation",
    "NegotiationMessage",
    "NegotiationAnalysis",
    "NEGOTIATION_STATUSES",
    "NEGOTIATION_STATUS_ACTIVE",
    "NEGOTIATION_STATUS_COMPLETED",
    "NEGOTIATION_STATUS_CANCELLED",
    "NEGOTIATION_MESSAGE_TEXT",
    "NEGOTIATION_MESSAGE_AI_SUGGESTION",
    "NEGOTIATION_MESSAGE_SYSTEM",
    "Notification",
    "NOTIFICATION_TYPES",
    "User",
    "ROLE_USER",
    "ROLE_ADMIN",
    "SUBSCRIPTION_TIER_FREE",
]
