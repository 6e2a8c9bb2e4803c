import pytest
from bson import ObjectId

from fritter.errors import BadValuesError, NotAllowedError, NotFoundError, NotOwnerError
from fritter.like.service import LikeType, like_concept, parse_like_type


@pytest.fixture
def post():
    return ObjectId()


class TestParseLikeType:

    def test_known_types(self):
        assert parse_like_type("like") is LikeType.like
        assert parse_like_type("dislike") is LikeType.dislike

    @pytest.mark.parametrize("value", [None, "", "love"])
    def test_bad_types(self, value):
        with pytest.raises(BadValuesError):
            parse_like_type(value)


class TestLikeConcept:

    @pytest.mark.asyncio
    async def test_create_like(self, alice, post):
        result = await like_concept.create(alice, post, "like")

        assert result["like"]["type"] == "like"
        assert await like_concept.did_user_like(post, alice, "like")
        assert not await like_concept.did_user_like(post, alice, "dislike")

    @pytest.mark.asyncio
    async def test_create_without_type_fails(self, alice, post):
        with pytest.raises(BadValuesError):
            await like_concept.create(alice, post, "")

    @pytest.mark.asyncio
    async def test_duplicate_like_fails(self, alice, post):
        await like_concept.create(alice, post, "like")

        with pytest.raises(NotAllowedError):
            await like_concept.create(alice, post, "like")

    @pytest.mark.asyncio
    async def test_like_and_dislike_are_separate(self, alice, post):
        await like_concept.create(alice, post, "like")
        await like_concept.create(alice, post, "dislike")

        assert len(await like_concept.get_by_owner(alice)) == 2
        assert len(await like_concept.get_by_owner(alice, "dislike")) == 1

    @pytest.mark.asyncio
    async def test_get_by_post(self, alice, bob, post):
        await like_concept.create(alice, post, "like")
        await like_concept.create(bob, post, "dislike")
        await like_concept.create(bob, ObjectId(), "like")

        assert len(await like_concept.get_by_post(post)) == 2
        likes = await like_concept.get_by_post(post, "like")
        assert [like["owner"] for like in likes] == [alice]

    @pytest.mark.asyncio
    async def test_update_type(self, alice, post):
        _id = (await like_concept.create(alice, post, "like"))["like"]["_id"]

        await like_concept.update(_id, "dislike")

        assert await like_concept.did_user_like(post, alice, "dislike")

    @pytest.mark.asyncio
    async def test_update_into_existing_reaction_fails(self, alice, post):
        _id = (await like_concept.create(alice, post, "like"))["like"]["_id"]
        await like_concept.create(alice, post, "dislike")

        with pytest.raises(NotAllowedError):
            await like_concept.update(_id, "dislike")

    @pytest.mark.asyncio
    async def test_update_to_same_type_is_allowed(self, alice, post):
        _id = (await like_concept.create(alice, post, "like"))["like"]["_id"]

        assert await like_concept.update(_id, "like") == {"msg": "Like successfully updated!"}

    @pytest.mark.asyncio
    async def test_update_missing_like_fails(self):
        with pytest.raises(NotFoundError):
            await like_concept.update(ObjectId(), "like")

    @pytest.mark.asyncio
    async def test_only_owner_may_change(self, alice, bob, post):
        _id = (await like_concept.create(alice, post, "like"))["like"]["_id"]

        with pytest.raises(NotOwnerError):
            await like_concept.is_owner(bob, _id)

    @pytest.mark.asyncio
    async def test_remove_by_post_and_owner(self, alice, bob, post):
        await like_concept.create(alice, post, "like")
        await like_concept.create(bob, post, "like")
        await like_concept.create(alice, ObjectId(), "like")

        assert await like_concept.remove_by_post(post) == 2
        assert await like_concept.remove_by_owner(alice) == 1
        assert await like_concept.get_likes() == []
