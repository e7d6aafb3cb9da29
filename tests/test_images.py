"""
Tests for the image record service.
"""
import logging
import string

import pytest
from pydantic import ValidationError
from sqlalchemy import text

import pixlink.services.images as images_module
from pixlink.exceptions import UniquenessViolationError, UserNotFoundError
from pixlink.models import Image
from pixlink.schemas import ImageUpdate, ImageUpload
from pixlink.services import (
    delete_image,
    get_image_by_short_url,
    list_user_images,
    update_image,
    upload_image,
)

ALPHANUMERIC = set(string.ascii_letters + string.digits)


def upload_input(user_id, **overrides):
    fields = {
        "user_id": user_id,
        "title": "Test Image",
        "description": "A test image",
        "filename": "test.jpg",
        "file_path": "/uploads/test.jpg",
        "file_size": 1024,
        "mime_type": "image/jpeg",
    }
    fields.update(overrides)
    return ImageUpload(**fields)


class TestUploadImage:
    """Test image upload."""

    def test_upload_image(self, db, test_user):
        image = upload_image(db, upload_input(test_user.id))

        assert image.id is not None
        assert image.user_id == test_user.id
        assert image.title == "Test Image"
        assert image.description == "A test image"
        assert image.filename == "test.jpg"
        assert image.file_path == "/uploads/test.jpg"
        assert image.file_size == 1024
        assert image.mime_type == "image/jpeg"
        assert image.view_count == 0
        assert image.is_public is True
        assert image.created_at is not None
        assert image.updated_at is not None

    def test_short_url_format(self, db, test_user):
        image = upload_image(db, upload_input(test_user.id))
        assert len(image.short_url) == 8
        assert set(image.short_url) <= ALPHANUMERIC

    def test_short_urls_unique(self, db, test_user):
        images = [upload_image(db, upload_input(test_user.id)) for _ in range(20)]
        assert len({image.short_url for image in images}) == 20

    def test_upload_private_without_description(self, db, test_user):
        image = upload_image(db, upload_input(test_user.id, description=None, is_public=False))
        assert image.description is None
        assert image.is_public is False

    def test_upload_unknown_user(self, db):
        with pytest.raises(UserNotFoundError):
            upload_image(db, upload_input(99999))
        assert db.query(Image).count() == 0

    def test_unknown_user_not_logged_as_error(self, db, caplog):
        with caplog.at_level(logging.DEBUG, logger="pixlink.services"):
            with pytest.raises(UserNotFoundError):
                upload_image(db, upload_input(99999))

        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    def test_owner_removed_before_commit(self, db, test_user, monkeypatch):
        # existence check passes, but the foreign key rejects the insert
        monkeypatch.setattr(images_module, "get_user", lambda db, user_id: test_user)

        with pytest.raises(UserNotFoundError) as exc_info:
            upload_image(db, upload_input(99999))

        assert exc_info.value.user_id == 99999
        assert db.query(Image).count() == 0

    def test_short_url_constraint_backstop(self, db, test_user, make_image, monkeypatch):
        make_image(test_user, short_url="dupe1234")
        monkeypatch.setattr(images_module, "generate_unique_short_url", lambda db: "dupe1234")

        with pytest.raises(UniquenessViolationError):
            upload_image(db, upload_input(test_user.id))

        assert db.query(Image).count() == 1

    @pytest.mark.parametrize("file_size", [0, -5])
    def test_non_positive_file_size(self, test_user, file_size):
        with pytest.raises(ValidationError):
            upload_input(test_user.id, file_size=file_size)

    @pytest.mark.parametrize("title", ["", "x" * 256])
    def test_title_length(self, test_user, title):
        with pytest.raises(ValidationError):
            upload_input(test_user.id, title=title)


class TestUpdateImage:
    """Test partial image updates."""

    def test_update_title_only(self, db, test_user, make_image):
        image = make_image(test_user)
        previous_updated_at = image.updated_at

        result = update_image(db, image.id, ImageUpdate(title="Updated Title"))

        assert result.id == image.id
        assert result.title == "Updated Title"
        assert result.description == "Original description"
        assert result.is_public is True
        assert result.updated_at > previous_updated_at

    def test_update_description(self, db, test_user, make_image):
        image = make_image(test_user)
        result = update_image(db, image.id, ImageUpdate(description="Updated description"))

        assert result.title == "Original Title"
        assert result.description == "Updated description"

    def test_update_visibility(self, db, test_user, make_image):
        image = make_image(test_user)
        result = update_image(db, image.id, ImageUpdate(is_public=False))

        assert result.is_public is False
        assert result.title == "Original Title"

    def test_explicit_null_clears_description(self, db, test_user, make_image):
        image = make_image(test_user)
        result = update_image(db, image.id, ImageUpdate(description=None))
        assert result.description is None

    def test_omitted_description_untouched(self, db, test_user, make_image):
        image = make_image(test_user)
        result = update_image(db, image.id, ImageUpdate(is_public=False))
        assert result.description == "Original description"

    def test_update_multiple_fields(self, db, test_user, make_image):
        image = make_image(test_user)
        result = update_image(
            db,
            image.id,
            ImageUpdate(title="New Title", description="New description", is_public=False),
        )
        assert result.title == "New Title"
        assert result.description == "New description"
        assert result.is_public is False

    def test_empty_update_refreshes_timestamp(self, db, test_user, make_image):
        image = make_image(test_user)
        previous_updated_at = image.updated_at

        result = update_image(db, image.id, ImageUpdate())

        assert result.title == "Original Title"
        assert result.updated_at > previous_updated_at

    def test_update_missing_image(self, db):
        assert update_image(db, 99999, ImageUpdate(title="Nope")) is None

    def test_update_not_restricted_to_owner(self, db, test_user, make_image):
        image = make_image(test_user)
        result = update_image(db, image.id, ImageUpdate(title="Changed by anyone"))
        assert result.title == "Changed by anyone"
        assert result.user_id == test_user.id

    def test_update_persists(self, db, test_user, make_image):
        image = make_image(test_user)
        update_image(db, image.id, ImageUpdate(title="Saved"))
        db.expire_all()
        assert db.query(Image).filter(Image.id == image.id).one().title == "Saved"

    @pytest.mark.parametrize("field", ["title", "is_public"])
    def test_null_for_required_fields_rejected(self, field):
        with pytest.raises(ValidationError):
            ImageUpdate(**{field: None})

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            ImageUpdate(title="")


class TestDeleteImage:
    """Test ownership-gated deletion."""

    def test_owner_deletes(self, db, test_user, make_image):
        image = make_image(test_user)
        assert delete_image(db, image.id, test_user.id) is True
        assert db.query(Image).count() == 0

    def test_other_user_cannot_delete(self, db, test_user, other_user, make_image):
        image = make_image(test_user)

        assert delete_image(db, image.id, other_user.id) is False

        remaining = list_user_images(db, test_user.id)
        assert [i.id for i in remaining] == [image.id]

    def test_missing_image(self, db, test_user):
        assert delete_image(db, 99999, test_user.id) is False

    def test_only_target_removed(self, db, test_user, make_image):
        keep = make_image(test_user)
        drop = make_image(test_user)

        assert delete_image(db, drop.id, test_user.id) is True
        assert [i.id for i in list_user_images(db, test_user.id)] == [keep.id]

    def test_user_delete_cascades(self, db, test_user, other_user, make_image):
        make_image(test_user)
        make_image(test_user)
        survivor = make_image(other_user)

        db.execute(text("DELETE FROM users WHERE id = :id"), {"id": test_user.id})
        db.commit()

        assert [row[0] for row in db.execute(text("SELECT id FROM images"))] == [survivor.id]


class TestGetImageByShortUrl:
    """Test short-link access and view counting."""

    def test_increments_view_count(self, db, test_user, make_image):
        image = make_image(test_user, short_url="abc12345")

        result = get_image_by_short_url(db, "abc12345")

        assert result.id == image.id
        assert result.view_count == 1

    def test_repeated_access(self, db, test_user, make_image):
        make_image(test_user, short_url="abc12345", view_count=5)

        for _ in range(4):
            result = get_image_by_short_url(db, "abc12345")

        assert result.view_count == 9

    def test_refreshes_updated_at(self, db, test_user, make_image):
        image = make_image(test_user, short_url="abc12345")
        previous_updated_at = image.updated_at

        result = get_image_by_short_url(db, "abc12345")

        assert result.updated_at > previous_updated_at

    def test_private_image_hidden(self, db, test_user, make_image):
        image = make_image(test_user, short_url="priv1234", is_public=False)
        previous_updated_at = image.updated_at

        assert get_image_by_short_url(db, "priv1234") is None

        stored = db.query(Image).filter(Image.id == image.id).one()
        assert stored.view_count == 0
        assert stored.updated_at == previous_updated_at

    def test_unknown_short_url(self, db, test_user, make_image):
        image = make_image(test_user, short_url="abc12345")

        assert get_image_by_short_url(db, "zzzzzzzz") is None
        assert db.query(Image).filter(Image.id == image.id).one().view_count == 0

    def test_only_matching_image_counted(self, db, test_user, make_image):
        make_image(test_user, short_url="first123")
        other = make_image(test_user, short_url="second12")

        get_image_by_short_url(db, "first123")

        assert db.query(Image).filter(Image.id == other.id).one().view_count == 0
