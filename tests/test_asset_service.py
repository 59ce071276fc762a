import pytest
from sqlalchemy.exc import OperationalError

from src.shared.adapters.blob_store import BlobStoreError
from src.shared.core.exceptions import StorageError, UnauthorizedError, ValidationError
from src.shared.services.asset_service import AssetService, build_asset_path, path_in_scope
from src.shared.utils.validation import MAX_ASSETS_PER_STORY

PNG = b"\x89PNG\r\n\x1a\n" + b"0" * 32


def test_asset_path_is_scoped_and_sanitized():
    path = build_asset_path("owner", "story", "my diagram (v2).png")

    assert path.startswith("owner/story/")
    assert path.endswith("-my_diagram__v2_.png")
    assert path_in_scope(path, "owner", "story")
    assert not path_in_scope(path, "other", "story")
    assert not path_in_scope("owner/story/../../other/x.png", "owner", "story")


async def test_upload_stores_blob_and_appends_record(
    session, owner, make_story, owner_principal, blob_store
):
    story = await make_story(owner)

    asset = await AssetService(session, blob_store).upload_asset(
        story.id, owner_principal, "diagram.png", "image/png", PNG
    )

    assert asset["type"] == "image"
    assert asset["size"] == len(PNG)
    assert asset["path"].startswith(f"{owner.id}/{story.id}/")
    assert asset["url"] == f"http://assets.test/{asset['path']}"
    assert (blob_store.root / asset["path"]).read_bytes() == PNG
    await session.refresh(story)
    assert [a["id"] for a in story.assets] == [asset["id"]]


async def test_unsupported_type_is_rejected(session, owner, make_story, owner_principal, blob_store):
    story = await make_story(owner)
    with pytest.raises(ValidationError):
        await AssetService(session, blob_store).upload_asset(
            story.id, owner_principal, "run.sh", "application/x-sh", b"#!/bin/sh"
        )


async def test_oversized_upload_is_rejected(session, owner, make_story, owner_principal, blob_store):
    story = await make_story(owner)
    with pytest.raises(ValidationError):
        await AssetService(session, blob_store, max_bytes=10).upload_asset(
            story.id, owner_principal, "big.png", "image/png", PNG
        )


async def test_asset_cap(session, owner, make_story, owner_principal, blob_store):
    story = await make_story(
        owner,
        assets=[{"id": str(index), "path": f"x/{index}"} for index in range(MAX_ASSETS_PER_STORY)],
    )
    with pytest.raises(ValidationError):
        await AssetService(session, blob_store).upload_asset(
            story.id, owner_principal, "one-more.png", "image/png", PNG
        )


async def test_stranger_cannot_upload(session, owner, make_story, stranger_principal, blob_store):
    story = await make_story(owner)
    with pytest.raises(UnauthorizedError):
        await AssetService(session, blob_store).upload_asset(
            story.id, stranger_principal, "x.png", "image/png", PNG
        )
    assert not blob_store.root.exists() or not any(blob_store.root.rglob("*.png"))


async def test_remove_deletes_blob_and_record(
    session, owner, make_story, owner_principal, blob_store
):
    story = await make_story(owner)
    service = AssetService(session, blob_store)
    asset = await service.upload_asset(story.id, owner_principal, "d.pdf", "application/pdf", b"%PDF")

    await service.remove_asset(story.id, owner_principal, asset["id"])

    assert not (blob_store.root / asset["path"]).exists()
    await session.refresh(story)
    assert story.assets == []


async def test_remove_refuses_path_outside_scope(
    session, owner, stranger, make_story, owner_principal, blob_store
):
    story = await make_story(
        owner,
        assets=[{"id": "planted", "path": f"{stranger.id}/other-story/1-x.png"}],
    )
    with pytest.raises(UnauthorizedError):
        await AssetService(session, blob_store).remove_asset(story.id, owner_principal, "planted")


async def test_failed_record_update_keeps_blob(
    session, owner, make_story, owner_principal, blob_store, monkeypatch
):
    story = await make_story(owner)
    service = AssetService(session, blob_store)
    asset = await service.upload_asset(story.id, owner_principal, "d.pdf", "application/pdf", b"%PDF")

    async def failing_apply(instance, **changes):
        raise OperationalError("UPDATE", {}, Exception("disk I/O error"))

    monkeypatch.setattr(service.repo, "apply", failing_apply)
    with pytest.raises(StorageError):
        await service.remove_asset(story.id, owner_principal, asset["id"])

    assert (blob_store.root / asset["path"]).exists()


async def test_blob_failure_after_commit_still_detaches_asset(
    session, owner, make_story, owner_principal, blob_store, monkeypatch
):
    story = await make_story(owner)
    service = AssetService(session, blob_store)
    asset = await service.upload_asset(story.id, owner_principal, "d.pdf", "application/pdf", b"%PDF")

    async def failing_remove(path):
        raise BlobStoreError("bucket unavailable")

    monkeypatch.setattr(blob_store, "remove", failing_remove)
    await service.remove_asset(story.id, owner_principal, asset["id"])

    await session.refresh(story)
    assert story.assets == []
