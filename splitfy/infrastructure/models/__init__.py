"""ORM models used by the application infrastructure."""

from .contract import (
    ContractCollaboratorModel,
    ContractModel,
    ContractSignatureModel,
    ContractTemplateModel,
)
from .message import MessageModel
from .negotiation import (
    NegotiationMessageModel,
    NegotiationModel,
    negotiation_participant_table,
)
from .notification import NotificationModel
from .user import UserModel
from .user_activity import ProfileViewModel, UserActivityModel
from .user_match import UserMatchModel

__all__ = [
    "ContractCollaboratorModel",
    "ContractModel",
    "ContractSignatureModel",
    "ContractTemplateModel",
    "MessageModel",
    "NegotiationMessageModel",
    "NegotiationModel",
    "negotiation_participant_table",
    "NotificationModel",
    "UserModel",
    "ProfileViewModel",
    "UserActivityModel",
    "UserMatchModel",
]
