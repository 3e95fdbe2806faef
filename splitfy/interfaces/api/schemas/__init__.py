from .activity import ActivityBatchCreate, ActivityCreate, ActivityRead, ActivityRecorded
from .analytics import (
    ActivityStatsRead,
    AnalyticsRead,
    CompletenessBucketRead,
    DailyCountRead,
    EngagementRead,
    LocationCountRead,
    SkillCountRead,
    UserStatsRead,
)
from .contract import (
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
from .match import MatchCreate, MatchRead, MatchStatusUpdate, RecommendationRead
from .message import ConversationRead, MarkedRead, MessageCreate, MessageRead
from .negotiation import (
    NegotiationCreate,
    NegotiationMessageCreate,
    NegotiationMessageRead,
    NegotiationRead,
    NegotiationUpdate,
)
from .notification import NotificationRead, NotificationsMarkedRead
from .user import (
    ProfileImageUpdate,
    ProfileUpdate,
    PublicProfileRead,
    UploadedObjectRead,
    UserPage,
    UserRead,
)

__all__ = [
    "ActivityBatchCreate",
    "ActivityCreate",
    "ActivityRead",
    "ActivityRecorded",
    "ActivityStatsRead",
    "AnalyticsRead",
    "CompletenessBucketRead",
    "DailyCountRead",
    "EngagementRead",
    "LocationCountRead",
    "SkillCountRead",
    "UserStatsRead",
    "CollaboratorCreate",
    "CollaboratorRead",
    "ContractCreate",
    "ContractRead",
    "ContractTemplateRead",
    "ContractUpdate",
    "DashboardStatsRead",
    "SignatureCreate",
    "SignatureRead",
    "MatchCreate",
    "MatchRead",
    "MatchStatusUpdate",
    "RecommendationRead",
    "ConversationRead",
    "MarkedRead",
    "MessageCreate",
    "MessageRead",
    "NegotiationCreate",
    "NegotiationMessageCreate",
    "NegotiationMessageRead",
    "NegotiationRead",
    "NegotiationUpdate",
    "NotificationRead",
    "NotificationsMarkedRead",
    "ProfileImageUpdate",
    "ProfileUpdate",
    "PublicProfileRead",
    "UploadedObjectRead",
    "UserPage",
    "UserRead",
]
