import pytest
from bson import ObjectId

from fritter.errors import BadValuesError, NotAllowedError, NotFoundError, NotOwnerError
from fritter.post.service import post_concept


class TestPostConcept:

    def setup_method(self):
        self.posts = post_concept

    @pytest.mark.asyncio
    async def test_create_post(self, alice):
        result = await self.posts.create(alice, "hello", {"backgroundColor": "#fff"})

        assert result["msg"] == "Post successfully created!"
        assert result["post"]["author"] == alice
        assert result["post"]["options"] == {"backgroundColor": "#fff"}
        assert result["post"]["dateCreated"] == result["post"]["dateUpdated"]

    @pytest.mark.asyncio
    async def test_create_empty_post_fails(self, alice):
        with pytest.raises(BadValuesError):
            await self.posts.create(alice, "")

    @pytest.mark.asyncio
    async def test_get_by_author(self, alice, bob):
        await self.posts.create(alice, "one")
        await self.posts.create(bob, "two")

        posts = await self.posts.get_by_author(alice)

        assert [p["content"] for p in posts] == ["one"]
        assert len(await self.posts.get_posts()) == 2

    @pytest.mark.asyncio
    async def test_update_content(self, alice):
        _id = (await self.posts.create(alice, "draft"))["post"]["_id"]

        await self.posts.update(_id, {"content": "final"})

        post = await self.posts.get_post(_id)
        assert post["content"] == "final"
        assert post["dateUpdated"] >= post["dateCreated"]

    @pytest.mark.asyncio
    async def test_update_cannot_change_author(self, alice, bob):
        _id = (await self.posts.create(alice, "mine"))["post"]["_id"]

        with pytest.raises(NotAllowedError):
            await self.posts.update(_id, {"author": bob})

    @pytest.mark.asyncio
    async def test_update_empty_content_fails(self, alice):
        _id = (await self.posts.create(alice, "mine"))["post"]["_id"]

        with pytest.raises(BadValuesError):
            await self.posts.update(_id, {"content": ""})

    @pytest.mark.asyncio
    async def test_update_missing_post_fails(self):
        with pytest.raises(NotFoundError):
            await self.posts.update(ObjectId(), {"content": "x"})

    @pytest.mark.asyncio
    async def test_is_author(self, alice, bob):
        _id = (await self.posts.create(alice, "mine"))["post"]["_id"]

        await self.posts.is_author(alice, _id)
        with pytest.raises(NotOwnerError):
            await self.posts.is_author(bob, _id)

    @pytest.mark.asyncio
    async def test_is_author_of_missing_post(self, alice):
        with pytest.raises(NotFoundError):
            await self.posts.is_author(alice, ObjectId())

    @pytest.mark.asyncio
    async def test_delete_post(self, alice):
        _id = (await self.posts.create(alice, "bye"))["post"]["_id"]

        await self.posts.delete(_id)

        with pytest.raises(NotFoundError):
            await self.posts.get_post(_id)

    @pytest.mark.asyncio
    async def test_remove_by_author_returns_removed_ids(self, alice, bob):
        first = (await self.posts.create(alice, "one"))["post"]["_id"]
        second = (await self.posts.create(alice, "two"))["post"]["_id"]
        await self.posts.create(bob, "three")

        removed = await self.posts.remove_by_author(alice)

        assert sorted(removed) == sorted([first, second])
        assert [p["content"] for p in await self.posts.get_posts()] == ["three"]
