"""
Content lifecycle: states, allowed transitions and display labels for each
kind of content the agency produces and the client reviews.
"""
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, NamedTuple, Optional, Tuple, Type


class SocialMediaPostStatus(str, Enum):
    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    PUBLISHED = "published"


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    REVIEW = "review"
    APPROVED = "approved"
    REJECTED = "rejected"
    SCHEDULED = "scheduled"
    SENT = "sent"
    ACTIVE = "active"
    COMPLETED = "completed"


class BlogPostStatus(str, Enum):
    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


class MessageStatus(str, Enum):
    COMPOSING = "composing"
    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"
    FAILED = "failed"


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVISION = "revision"


class Transition(NamedTuple):
    action: str
    target: Enum


class Lifecycle:
    """Transition table for one status enum, checked for exhaustiveness on creation."""

    def __init__(self, name: str, status_enum: Type[Enum], labels: Dict[Enum, str],
                 transitions: Dict[Enum, Tuple[Transition, ...]]):
        for table_name, table in (("labels", labels), ("transitions", transitions)):
            missing = [s.value for s in status_enum if s not in table]
            if missing:
                raise RuntimeError(f"{name} {table_name} missing states: {', '.join(missing)}")
        self.name = name
        self.status_enum = status_enum
        self.labels = MappingProxyType(dict(labels))
        self.transitions = MappingProxyType(dict(transitions))

    def _status(self, value) -> Enum:
        return self.status_enum(value)

    def next_states(self, current) -> List[Enum]:
        return [t.target for t in self.transitions[self._status(current)]]

    def available_actions(self, current) -> List[str]:
        return [t.action for t in self.transitions[self._status(current)]]

    def can_transition(self, current, target) -> bool:
        return self._status(target) in self.next_states(current)

    def transition(self, current, target) -> Optional[Enum]:
        if self.can_transition(current, target):
            return self._status(target)
        return None

    def target_for_action(self, current, action: str) -> Optional[Enum]:
        for t in self.transitions[self._status(current)]:
            if t.action == action:
                return t.target
        return None

    def label(self, status) -> str:
        return self.labels[self._status(status)]


S = SocialMediaPostStatus
SOCIAL_MEDIA_POST_LIFECYCLE = Lifecycle(
    "SocialMediaPost",
    SocialMediaPostStatus,
    labels={
        S.DRAFT: "Draft",
        S.PENDING_REVIEW: "Pending Review",
        S.APPROVED: "Approved",
        S.REJECTED: "Rejected",
        S.PUBLISHED: "Published",
    },
    transitions={
        S.DRAFT: (Transition("submit_for_review", S.PENDING_REVIEW),),
        S.PENDING_REVIEW: (Transition("approve", S.APPROVED), Transition("reject", S.REJECTED)),
        S.APPROVED: (Transition("publish", S.PUBLISHED),),
        S.REJECTED: (Transition("edit_after_rejection", S.DRAFT),),
        S.PUBLISHED: (),
    },
)

C = CampaignStatus
CAMPAIGN_LIFECYCLE = Lifecycle(
    "Campaign",
    CampaignStatus,
    labels={
        C.DRAFT: "Draft",
        C.REVIEW: "Review",
        C.APPROVED: "Approved",
        C.REJECTED: "Rejected",
        C.SCHEDULED: "Scheduled",
        C.SENT: "Sent",
        C.ACTIVE: "Active",
        C.COMPLETED: "Completed",
    },
    transitions={
        C.DRAFT: (Transition("submit_for_review", C.REVIEW),),
        C.REVIEW: (Transition("approve", C.APPROVED), Transition("reject", C.REJECTED)),
        C.APPROVED: (Transition("schedule", C.SCHEDULED), Transition("send_immediately", C.SENT)),
        C.REJECTED: (Transition("edit_after_rejection", C.DRAFT),),
        C.SCHEDULED: (Transition("send_scheduled", C.SENT),),
        C.SENT: (Transition("activate", C.ACTIVE),),
        C.ACTIVE: (Transition("complete", C.COMPLETED),),
        C.COMPLETED: (),
    },
)

B = BlogPostStatus
BLOG_POST_LIFECYCLE = Lifecycle(
    "BlogPost",
    BlogPostStatus,
    labels={
        B.DRAFT: "Draft",
        B.PENDING_REVIEW: "Pending Review",
        B.APPROVED: "Approved",
        B.REJECTED: "Rejected",
        B.SCHEDULED: "Scheduled",
        B.PUBLISHED: "Published",
    },
    transitions={
        B.DRAFT: (Transition("submit_for_review", B.PENDING_REVIEW),),
        B.PENDING_REVIEW: (Transition("approve", B.APPROVED), Transition("reject", B.REJECTED)),
        B.APPROVED: (Transition("publish_immediately", B.PUBLISHED), Transition("schedule_publish", B.SCHEDULED)),
        B.REJECTED: (Transition("edit_after_rejection", B.DRAFT),),
        B.SCHEDULED: (Transition("publish_scheduled", B.PUBLISHED),),
        B.PUBLISHED: (),
    },
)

M = MessageStatus
MESSAGE_LIFECYCLE = Lifecycle(
    "Message",
    MessageStatus,
    labels={
        M.COMPOSING: "Composing",
        M.SENT: "Sent",
        M.DELIVERED: "Delivered",
        M.READ: "Read",
        M.FAILED: "Failed",
    },
    transitions={
        M.COMPOSING: (Transition("send", M.SENT),),
        M.SENT: (Transition("deliver", M.DELIVERED), Transition("fail", M.FAILED)),
        M.DELIVERED: (Transition("read", M.READ),),
        M.READ: (),
        M.FAILED: (Transition("retry", M.SENT),),
    },
)

A = ApprovalStatus
APPROVAL_LIFECYCLE = Lifecycle(
    "Approval",
    ApprovalStatus,
    labels={
        A.PENDING: "Pending Review",
        A.APPROVED: "Approved",
        A.REJECTED: "Rejected",
        A.REVISION: "Revision Requested",
    },
    transitions={
        A.PENDING: (
            Transition("approve", A.APPROVED),
            Transition("reject", A.REJECTED),
            Transition("request_revision", A.REVISION),
        ),
        A.APPROVED: (),
        A.REJECTED: (),
        A.REVISION: (Transition("resubmit", A.PENDING),),
    },
)

del S, C, B, M, A

LIFECYCLES = MappingProxyType({
    "social_post": SOCIAL_MEDIA_POST_LIFECYCLE,
    "campaign": CAMPAIGN_LIFECYCLE,
    "blog_post": BLOG_POST_LIFECYCLE,
    "message": MESSAGE_LIFECYCLE,
    "approval": APPROVAL_LIFECYCLE,
})
