"""
Mock content generator tests: determinism, referential consistency and
status-dependent fields.
"""
from datetime import datetime, timezone

import pytest

from core.content_generator import ContentGenerator, CLIENTS_BY_ID, CONTENT_CLIENTS, PLATFORMS, client_id_for
from core.lifecycle import SocialMediaPostStatus, CampaignStatus, BlogPostStatus, MessageStatus

NOW = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def gen():
    return ContentGenerator(seed=42, now=NOW)


class TestDeterminism:

    def test_same_seed_same_records(self, gen):
        other = ContentGenerator(seed=42, now=NOW)
        assert gen.generate_social_media_posts() == other.generate_social_media_posts()
        assert gen.generate_campaigns() == other.generate_campaigns()
        assert gen.generate_blog_posts() == other.generate_blog_posts()

    def test_repeated_calls_are_stable(self, gen):
        assert gen.generate_messages("conv-1") == gen.generate_messages("conv-1")

    def test_kinds_do_not_share_a_stream(self, gen):
        before = gen.generate_campaigns()
        gen.generate_social_media_posts(100)
        assert gen.generate_campaigns() == before

    def test_default_counts(self, gen):
        assert len(gen.generate_social_media_posts()) == 45
        assert len(gen.generate_campaigns()) == 28
        assert len(gen.generate_blog_posts()) == 35
        assert len(gen.generate_conversations()) == 5
        assert len(gen.generate_projects()) == 10


class TestReferentialConsistency:

    def test_content_clients_exist_in_directory(self):
        for name in CONTENT_CLIENTS:
            assert client_id_for(name) in CLIENTS_BY_ID

    def test_unknown_client_has_no_id(self):
        assert client_id_for("Nobody Inc") is None

    def test_every_record_carries_its_client_id(self, gen):
        records = (gen.generate_social_media_posts() + gen.generate_campaigns() + gen.generate_blog_posts()
                   + gen.generate_projects())
        for record in records:
            assert CLIENTS_BY_ID[record.client_id].name == record.client

    def test_conversations_match_clients(self, gen):
        for conversation in gen.generate_conversations():
            assert CLIENTS_BY_ID[conversation.client_id].name == conversation.client_name

    def test_ids_are_sequential(self, gen):
        assert [p.id for p in gen.generate_blog_posts(5)] == [1, 2, 3, 4, 5]


class TestStatusDependentFields:

    def test_social_posts(self, gen):
        for post in gen.generate_social_media_posts():
            assert set(post.platforms) <= set(PLATFORMS)
            if post.status == SocialMediaPostStatus.PUBLISHED:
                assert post.published_at and post.engagement
                assert post.engagement.likes <= post.engagement.reach
            else:
                assert post.engagement is None
            if post.status == SocialMediaPostStatus.REJECTED:
                assert post.rejection_reason

    def test_campaigns(self, gen):
        for campaign in gen.generate_campaigns():
            sent = campaign.status in (CampaignStatus.SENT, CampaignStatus.ACTIVE, CampaignStatus.COMPLETED)
            assert (campaign.metrics is not None) == sent
            if campaign.status == CampaignStatus.COMPLETED:
                assert campaign.progress == 100
            if campaign.metrics:
                assert campaign.metrics.delivered <= campaign.metrics.sent
                assert campaign.metrics.opened <= campaign.metrics.delivered
                assert len(campaign.daily_metrics) == 7
            assert (campaign.email_details is not None) == (campaign.type == "email")

    def test_blog_posts(self, gen):
        for post in gen.generate_blog_posts():
            if post.status == BlogPostStatus.PUBLISHED:
                assert post.metrics and post.traffic_sources
                assert sum(s.percentage for s in post.traffic_sources) == 100
            if post.status == BlogPostStatus.DRAFT:
                assert post.seo is None

    def test_messages_alternate_senders(self, gen):
        messages = gen.generate_messages("conv-2", count=4)
        assert [m.sender_role for m in messages] == ["agency", "client", "agency", "client"]
        assert messages[0].status == MessageStatus.DELIVERED and not messages[0].is_read
        assert messages[1].status == MessageStatus.READ and messages[1].read_at
        assert messages[0].attachments and not messages[1].attachments

    def test_completed_projects_are_done(self, gen):
        for project in gen.generate_projects(30):
            if project.status == "completed":
                assert project.progress == 100
                assert project.spent is not None

    def test_dates_relative_to_now(self, gen):
        for post in gen.generate_social_media_posts():
            scheduled = datetime.fromisoformat(post.scheduled_date)
            assert (NOW - scheduled).days <= 30
