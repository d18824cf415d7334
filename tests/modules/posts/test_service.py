"""
Tests for post listing and admin maintenance.
"""

import pytest

from modules.posts.exceptions import PostNotFoundError
from modules.posts.models import PostRequest, PostStatus
from modules.posts.service import PostService
from shared.exceptions import PolicyDeniedError

from tests.conftest import ADMIN_ID, ALICE_ID


def post_request(**overrides) -> PostRequest:
    data = {
        "title": "Draft title",
        "image": "https://img/post.png",
        "category_id": 1,
        "description": "Short",
        "content": "Body",
        "status_id": PostStatus.PUBLISHED,
    }
    data.update(overrides)
    return PostRequest(**data)


class TestListPublished:
    @pytest.fixture
    def posts(self, store):
        store.add_post(2, title="Cooking with cats", date="2024-02-01T00:00:00+00:00")
        store.add_post(3, title="Secret draft", status_id=1, date="2024-03-01T00:00:00+00:00")
        store.add_post(4, title="Cats and dogs", category_id=2, date="2024-04-01T00:00:00+00:00")
        store.tables["blog_posts"][0]["date"] = "2024-01-01T00:00:00+00:00"
        return store

    @pytest.mark.asyncio
    async def test_only_published_newest_first(self, posts):
        response = await PostService(posts.anonymous()).list_published()
        assert [p.id for p in response.posts] == [4, 2, 1]

    @pytest.mark.asyncio
    async def test_keyword_matches_title_case_insensitively(self, posts):
        response = await PostService(posts.anonymous()).list_published(keyword="CATS")
        assert [p.id for p in response.posts] == [4, 2]

    @pytest.mark.asyncio
    async def test_category_filter(self, posts):
        response = await PostService(posts.anonymous()).list_published(category_id=2)
        assert [p.id for p in response.posts] == [4]

    @pytest.mark.asyncio
    async def test_pagination(self, posts):
        response = await PostService(posts.anonymous()).list_published(page=2, limit=2)
        assert [p.id for p in response.posts] == [1]
        assert response.page == 2

    @pytest.mark.asyncio
    async def test_admin_still_only_lists_published(self, posts):
        response = await PostService(posts.client(ADMIN_ID)).list_published()
        assert 3 not in [p.id for p in response.posts]


class TestGetPost:
    @pytest.mark.asyncio
    async def test_draft_hidden_from_public(self, store):
        store.add_post(5, status_id=1)
        with pytest.raises(PostNotFoundError):
            await PostService(store.anonymous()).get_post(5)

    @pytest.mark.asyncio
    async def test_draft_visible_to_admin(self, store):
        store.add_post(5, status_id=1)
        post = await PostService(store.client(ADMIN_ID)).get_post(5)
        assert post.status_id == PostStatus.DRAFT


class TestAdminWrites:
    @pytest.mark.asyncio
    async def test_create(self, store):
        post = await PostService(store.client(ADMIN_ID)).create_post(post_request())
        assert post.title == "Draft title"
        assert post.likes == 0
        assert post.date is not None

    @pytest.mark.asyncio
    async def test_user_cannot_create(self, store):
        with pytest.raises(PolicyDeniedError):
            await PostService(store.client(ALICE_ID)).create_post(post_request())

    @pytest.mark.asyncio
    async def test_update(self, store):
        post = await PostService(store.client(ADMIN_ID)).update_post(1, post_request(title="New"))
        assert post.title == "New"

    @pytest.mark.asyncio
    async def test_update_missing(self, store):
        with pytest.raises(PostNotFoundError):
            await PostService(store.client(ADMIN_ID)).update_post(99, post_request())

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await PostService(store.client(ADMIN_ID)).delete_post(1)
        assert store.rows("blog_posts", id=1) == []

    @pytest.mark.asyncio
    async def test_user_delete_matches_nothing(self, store):
        with pytest.raises(PostNotFoundError):
            await PostService(store.client(ALICE_ID)).delete_post(1)
        assert len(store.rows("blog_posts", id=1)) == 1

    @pytest.mark.asyncio
    async def test_user_update_matches_nothing(self, store):
        with pytest.raises(PostNotFoundError):
            await PostService(store.client(ALICE_ID)).update_post(1, post_request(title="Mine now"))
        assert store.rows("blog_posts", id=1)[0]["title"] == "Hello world"


class TestAdminListing:
    @pytest.fixture
    def posts(self, store):
        store.tables["blog_posts"][0]["date"] = "2024-01-01T00:00:00+00:00"
        store.add_post(2, title="Draft about dogs", status_id=1, date="2024-02-01T00:00:00+00:00")
        store.add_post(
            3,
            title="Weekly notes",
            content="Mostly about DOGS this week",
            date="2024-03-01T00:00:00+00:00",
        )
        store.add_post(4, title="Other", category_id=2, status_id=1, date="2024-04-01T00:00:00+00:00")
        return store

    @pytest.mark.asyncio
    async def test_includes_drafts_newest_first(self, posts):
        response = await PostService(posts.client(ADMIN_ID)).list_all()
        assert [p.id for p in response.posts] == [4, 3, 2, 1]
        assert response.total_posts == 4
        assert response.total_pages == 1
        assert not response.has_next and not response.has_prev

    @pytest.mark.asyncio
    async def test_status_filter(self, posts):
        response = await PostService(posts.client(ADMIN_ID)).list_all(status=PostStatus.DRAFT)
        assert [p.id for p in response.posts] == [4, 2]
        assert response.total_posts == 2

    @pytest.mark.asyncio
    async def test_keyword_searches_title_description_and_content(self, posts):
        response = await PostService(posts.client(ADMIN_ID)).list_all(keyword="dogs")
        assert [p.id for p in response.posts] == [3, 2]

    @pytest.mark.asyncio
    async def test_category_filter(self, posts):
        response = await PostService(posts.client(ADMIN_ID)).list_all(category_id=2)
        assert [p.id for p in response.posts] == [4]

    @pytest.mark.asyncio
    async def test_pagination_totals(self, posts):
        response = await PostService(posts.client(ADMIN_ID)).list_all(page=2, limit=3)
        assert [p.id for p in response.posts] == [1]
        assert response.total_posts == 4
        assert response.total_pages == 2
        assert response.has_prev and not response.has_next

    @pytest.mark.asyncio
    async def test_policy_hides_drafts_from_users(self, posts):
        response = await PostService(posts.client(ALICE_ID)).list_all()
        assert [p.id for p in response.posts] == [3, 1]
        assert response.total_posts == 2


class TestStats:
    @pytest.mark.asyncio
    async def test_counts(self, store):
        store.add_post(2, status_id=1)
        store.add_post(3)
        store.seed("comments", {"post_id": 1, "user_id": ALICE_ID, "comment": "hi"})

        stats = await PostService(store.client(ADMIN_ID)).get_stats()

        assert stats.total_posts == 3
        assert stats.published_posts == 2
        assert stats.draft_posts == 1
        assert stats.total_categories == 1
        assert stats.total_users == 3
        assert stats.total_comments == 1


class TestVisibility:
    @pytest.mark.asyncio
    async def test_anonymous_sees_what_an_unprivileged_user_sees(self, store):
        store.add_post(2, status_id=1)
        store.add_post(3)

        anonymous = await PostService(store.anonymous()).list_published()
        user = await PostService(store.client(ALICE_ID)).list_published()

        assert [p.id for p in anonymous.posts] == [p.id for p in user.posts]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("table", ["blog_posts", "post_likes", "users", "comments", "notifications"])
    async def test_scoped_rows_are_a_subset_of_admin_rows(self, store, table):
        store.add_post(2, status_id=1)
        store.seed("post_likes", {"post_id": 1, "user_id": ALICE_ID}, {"post_id": 1, "user_id": ADMIN_ID})
        store.seed("comments", {"post_id": 1, "user_id": ADMIN_ID, "comment": "c"})
        store.seed(
            "notifications",
            {"user_id": ADMIN_ID, "title": "t", "message": "m", "type": "like"},
        )

        scoped = await store.client(ALICE_ID).select(table)
        everything = await store.admin().select(table)

        assert {r["id"] for r in scoped} <= {r["id"] for r in everything}
