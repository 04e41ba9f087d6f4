import pytest
from sqlalchemy import select

from insights.models.registry import AuditLog
from insights.services import images as image_svc
from insights.services.errors import Unauthorized, ValidationFailed

MIB = 1024 * 1024


def test_too_large_jpeg_is_rejected(session, admin, storage):
    with pytest.raises(ValidationFailed) as ei:
        image_svc.upload_image(session, admin, storage, b"\xff" * (10 * MIB), "big.jpg", "image/jpeg")
    assert ei.value.code == "file_too_large"
    assert image_svc.list_images(session, admin) == []


def test_wrong_mime_type_is_rejected(session, admin, storage):
    with pytest.raises(ValidationFailed) as ei:
        image_svc.upload_image(session, admin, storage, b"%PDF" * (MIB // 2), "doc.pdf", "application/pdf")
    assert ei.value.code == "invalid_file_type"


def test_empty_upload_is_rejected(session, admin, storage):
    with pytest.raises(ValidationFailed) as ei:
        image_svc.upload_image(session, admin, storage, None, None, None)
    assert ei.value.code == "no_file_provided"


def test_png_upload_succeeds_with_random_filename(session, admin, storage):
    data = b"\x89PNG\r\n\x1a\n" + b"\x00" * (2 * MIB)
    img = image_svc.upload_image(session, admin, storage, data, "My Photo.PNG", "image/png", alt=" cover ")

    assert img.url.startswith("/uploads/")
    assert img.filename != "My Photo.PNG"
    assert img.filename.endswith(".png")
    assert img.url == f"/uploads/{img.filename}"
    assert img.alt == "cover"
    assert img.uploader.email == "admin@aiinsights.dev"
    assert (storage.upload_dir / img.filename).read_bytes() == data


def test_filenames_do_not_collide(session, admin, storage):
    a = image_svc.upload_image(session, admin, storage, b"gif", "a.gif", "image/gif")
    b = image_svc.upload_image(session, admin, storage, b"gif", "a.gif", "image/gif")
    assert a.filename != b.filename


def test_extension_falls_back_to_mime_type():
    name = image_svc.random_filename("noextension", "image/webp")
    assert name.endswith(".webp")
    assert len(name.split(".")[0]) == 32


def test_exact_limit_is_allowed(session, admin, storage):
    img = image_svc.upload_image(session, admin, storage, b"a" * 100, "x.jpg", "image/jpeg", max_bytes=100)
    assert img.id is not None
    with pytest.raises(ValidationFailed):
        image_svc.upload_image(session, admin, storage, b"a" * 101, "x.jpg", "image/jpeg", max_bytes=100)


def test_upload_and_list_require_admin(session, admin, reader, storage):
    with pytest.raises(Unauthorized):
        image_svc.upload_image(session, reader, storage, b"png", "a.png", "image/png")
    with pytest.raises(Unauthorized):
        image_svc.list_images(session, None)
    assert not storage.upload_dir.exists()


def test_list_newest_first(session, admin, storage):
    first = image_svc.upload_image(session, admin, storage, b"1", "1.png", "image/png")
    second = image_svc.upload_image(session, admin, storage, b"2", "2.png", "image/png")
    ids = [i.id for i in image_svc.list_images(session, admin)]
    assert ids == [second.id, first.id]


def test_over_long_alt_is_rejected_before_storing(session, admin, storage):
    with pytest.raises(ValidationFailed) as ei:
        image_svc.upload_image(session, admin, storage, b"png", "a.png", "image/png", alt="x" * 256)
    assert "alt" in ei.value.errors
    assert not storage.upload_dir.exists()

    img = image_svc.upload_image(session, admin, storage, b"png", "a.png", "image/png", alt="x" * 255)
    assert len(img.alt) == 255


@pytest.mark.parametrize(
    "original, content_type, ext",
    [
        ("page.html", "image/png", ".png"),
        ("shell.php", "image/gif", ".gif"),
        ("photo.JPEG", "image/jpeg", ".jpeg"),
        ("photo.jpg", "image/jpeg", ".jpg"),
        ("photo.jpg", "image/png", ".png"),
    ],
)
def test_extension_must_match_the_mime_type(original, content_type, ext):
    name = image_svc.random_filename(original, content_type)
    assert name.endswith(ext)
    assert name.count(".") == 1


def test_upload_is_audited(session, admin, storage):
    img = image_svc.upload_image(session, admin, storage, b"gif", "a.gif", "image/gif")
    rows = session.execute(select(AuditLog)).scalars().all()
    assert [(a.action, a.entity_id, a.actor_id) for a in rows] == [("image.upload", img.id, admin.user_id)]
