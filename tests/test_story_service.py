import pytest

from src.shared.core.exceptions import StoryNotFoundError, UnauthorizedError, ValidationError
from src.shared.models.enums import StoryStatus, TemplateType
from src.shared.repositories.profile_repository import ProfileStoryRepository
from src.shared.services.profile_service import ProfileService
from src.shared.services.story_service import StoryService
from src.shared.services.story_templates import get_template, list_templates


class TestTemplates:
    def test_every_template_type_has_prompts(self):
        templates = list_templates()

        assert {t.type for t in templates} == set(TemplateType)
        for template in templates:
            assert template.prompts
            assert get_template(template.type) is template


class TestCreateStory:
    async def test_creates_draft_at_end_of_list(self, session, owner, make_story, owner_principal):
        await make_story(owner, display_order=0)
        service = StoryService(session)

        story = await service.create_story(owner_principal, "lessons_learned", "  Outage  ")

        assert story.title == "Outage"
        assert story.status == StoryStatus.DRAFT
        assert story.template_type == TemplateType.LESSONS_LEARNED
        assert story.display_order == 1
        assert story.responses == {}
        assert story.assets == []

    async def test_unknown_template_is_rejected(self, session, owner_principal):
        with pytest.raises(ValidationError) as exc:
            await StoryService(session).create_story(owner_principal, "novel", "Title")
        assert exc.value.field == "template_type"

    async def test_title_bounds(self, session, owner_principal):
        service = StoryService(session)
        await service.create_story(owner_principal, "project", "t" * 200)
        with pytest.raises(ValidationError):
            await service.create_story(owner_principal, "project", "t" * 201)
        with pytest.raises(ValidationError):
            await service.create_story(owner_principal, "project", "   ")


class TestUpdateStory:
    async def test_partial_update(self, session, owner, make_story, owner_principal):
        story = await make_story(owner, title="Before", status=StoryStatus.DRAFT)

        updated = await StoryService(session).update_story(
            story.id,
            owner_principal,
            {
                "responses": {"problem": "p", "solution": None},
                "status": "published",
                "video_url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            },
        )

        assert updated.title == "Before"
        assert updated.responses == {"problem": "p", "solution": ""}
        assert updated.status == StoryStatus.PUBLISHED
        assert updated.video_url.endswith("dQw4w9WgXcQ")

    async def test_response_over_limit_changes_nothing(
        self, session, owner, make_story, owner_principal
    ):
        story = await make_story(owner, responses={"problem": "original"})
        service = StoryService(session)

        with pytest.raises(ValidationError):
            await service.update_story(story.id, owner_principal, {"responses": {"problem": "r" * 10_001}})

        assert (await service.get_story(story.id, owner_principal)).responses == {"problem": "original"}

    async def test_stranger_cannot_update(self, session, owner, make_story, stranger_principal):
        story = await make_story(owner)
        with pytest.raises(UnauthorizedError):
            await StoryService(session).update_story(story.id, stranger_principal, {"title": "Mine"})

    async def test_assets_can_be_reordered_and_dropped(
        self, session, owner, make_story, owner_principal, blob_store
    ):
        story = await make_story(owner)
        assets = [
            {
                "id": f"asset-{index}",
                "name": f"{index}.png",
                "type": "image",
                "size": 3,
                "url": f"http://assets.test/{owner.id}/{story.id}/{index}.png",
                "path": f"{owner.id}/{story.id}/{index}.png",
                "mime_type": "image/png",
            }
            for index in range(3)
        ]
        for asset in assets:
            await blob_store.put(asset["path"], b"png", "image/png")
        story.assets = assets
        await session.commit()

        updated = await StoryService(session, blob_store).update_story(
            story.id, owner_principal, {"assets": ["asset-2", {"id": "asset-0"}]}
        )

        assert [a["id"] for a in updated.assets] == ["asset-2", "asset-0"]
        assert not (blob_store.root / assets[1]["path"]).exists()
        assert (blob_store.root / assets[0]["path"]).exists()

    async def test_unknown_asset_id_is_rejected(self, session, owner, make_story, owner_principal):
        story = await make_story(owner)
        with pytest.raises(ValidationError):
            await StoryService(session).update_story(story.id, owner_principal, {"assets": ["nope"]})


class TestDeleteAndReorder:
    async def test_delete_drops_story_from_profiles(
        self, session, database, owner, make_story, owner_principal
    ):
        keep = await make_story(owner, title="Keep")
        drop = await make_story(owner, title="Drop")
        profile = await ProfileService(session).create_profile(
            owner_principal, "Backend", [keep.id, drop.id]
        )
        service = StoryService(session)

        await service.delete_story(drop.id, owner_principal)

        async with database.session_factory() as reader:
            assert await ProfileStoryRepository(reader).list_story_ids(profile.id) == [keep.id]
        with pytest.raises(StoryNotFoundError):
            await service.get_story(drop.id, owner_principal)

    async def test_delete_leaves_blobs_outside_story_scope(
        self, session, owner, stranger, make_story, owner_principal, blob_store
    ):
        story = await make_story(owner)
        own_path = f"{owner.id}/{story.id}/1-own.png"
        foreign_path = f"{stranger.id}/other/1-foreign.png"
        await blob_store.put(own_path, b"png", "image/png")
        await blob_store.put(foreign_path, b"png", "image/png")
        story.assets = [
            {"id": "own", "name": "own.png", "type": "image", "size": 3,
             "url": "http://assets.test/own", "path": own_path, "mime_type": "image/png"},
            {"id": "foreign", "name": "foreign.png", "type": "image", "size": 3,
             "url": "http://assets.test/foreign", "path": foreign_path, "mime_type": "image/png"},
        ]
        await session.commit()

        await StoryService(session, blob_store).delete_story(story.id, owner_principal)

        assert not (blob_store.root / own_path).exists()
        assert (blob_store.root / foreign_path).exists()

    async def test_reorder(self, session, owner, make_story, owner_principal):
        a = await make_story(owner, title="A", display_order=0)
        b = await make_story(owner, title="B", display_order=1)

        stories = await StoryService(session).reorder_stories(owner_principal, [str(b.id), str(a.id)])

        assert [s.id for s in stories] == [b.id, a.id]
        assert [s.display_order for s in stories] == [0, 1]

    async def test_reorder_rejects_foreign_story(
        self, session, owner, stranger, make_story, owner_principal
    ):
        mine = await make_story(owner)
        theirs = await make_story(stranger)
        with pytest.raises(UnauthorizedError):
            await StoryService(session).reorder_stories(owner_principal, [mine.id, theirs.id])

    async def test_list_is_owner_scoped(self, session, owner, stranger, make_story, owner_principal):
        await make_story(owner, title="Mine")
        await make_story(stranger, title="Theirs")

        stories = await StoryService(session).list_stories(owner_principal)

        assert [s.title for s in stories] == ["Mine"]
