"""
Workflow state machine tests.
"""
import pytest

from core.lifecycle import (
    LIFECYCLES, SOCIAL_MEDIA_POST_LIFECYCLE, CAMPAIGN_LIFECYCLE, BLOG_POST_LIFECYCLE,
    MESSAGE_LIFECYCLE, APPROVAL_LIFECYCLE,
    SocialMediaPostStatus, CampaignStatus, BlogPostStatus, MessageStatus, ApprovalStatus,
)


class TestLifecycleTables:

    @pytest.mark.parametrize("name", list(LIFECYCLES))
    def test_every_state_has_label_and_transitions(self, name):
        lifecycle = LIFECYCLES[name]
        for status in lifecycle.status_enum:
            assert lifecycle.label(status)
            assert isinstance(lifecycle.next_states(status), list)

    @pytest.mark.parametrize("lifecycle,terminal", [
        (SOCIAL_MEDIA_POST_LIFECYCLE, SocialMediaPostStatus.PUBLISHED),
        (CAMPAIGN_LIFECYCLE, CampaignStatus.COMPLETED),
        (BLOG_POST_LIFECYCLE, BlogPostStatus.PUBLISHED),
        (MESSAGE_LIFECYCLE, MessageStatus.READ),
        (APPROVAL_LIFECYCLE, ApprovalStatus.APPROVED),
        (APPROVAL_LIFECYCLE, ApprovalStatus.REJECTED),
    ])
    def test_terminal_states(self, lifecycle, terminal):
        assert lifecycle.next_states(terminal) == []
        assert lifecycle.available_actions(terminal) == []


class TestTransitions:

    def test_post_review_cycle(self):
        lc = SOCIAL_MEDIA_POST_LIFECYCLE
        assert lc.available_actions("pending_review") == ["approve", "reject"]
        assert lc.transition("pending_review", "approved") == SocialMediaPostStatus.APPROVED
        assert lc.transition("rejected", "draft") == SocialMediaPostStatus.DRAFT

    def test_post_cannot_skip_review(self):
        assert SOCIAL_MEDIA_POST_LIFECYCLE.transition("draft", "published") is None
        assert not SOCIAL_MEDIA_POST_LIFECYCLE.can_transition("draft", "approved")

    def test_campaign_send_paths(self):
        lc = CAMPAIGN_LIFECYCLE
        assert lc.next_states(CampaignStatus.APPROVED) == [CampaignStatus.SCHEDULED, CampaignStatus.SENT]
        assert lc.target_for_action(CampaignStatus.SCHEDULED, "send_scheduled") == CampaignStatus.SENT
        assert lc.transition(CampaignStatus.SENT, CampaignStatus.COMPLETED) is None

    def test_blog_publish_paths(self):
        lc = BLOG_POST_LIFECYCLE
        assert lc.target_for_action("approved", "publish_immediately") == BlogPostStatus.PUBLISHED
        assert lc.target_for_action("approved", "schedule_publish") == BlogPostStatus.SCHEDULED

    def test_message_retry_after_failure(self):
        assert MESSAGE_LIFECYCLE.transition("failed", "sent") == MessageStatus.SENT
        assert MESSAGE_LIFECYCLE.transition("delivered", "failed") is None

    def test_approval_revision_loop(self):
        lc = APPROVAL_LIFECYCLE
        assert lc.target_for_action("pending", "request_revision") == ApprovalStatus.REVISION
        assert lc.target_for_action("revision", "resubmit") == ApprovalStatus.PENDING
        assert lc.target_for_action("approved", "resubmit") is None
        assert lc.label("revision") == "Revision Requested"

    def test_unknown_status_raises(self):
        with pytest.raises(ValueError):
            BLOG_POST_LIFECYCLE.next_states("archived")

    def test_unknown_action_has_no_target(self):
        assert CAMPAIGN_LIFECYCLE.target_for_action("draft", "publish") is None
