from io import BytesIO

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from PIL import Image

pytestmark = pytest.mark.django_db


def _png(name="vaza.png", size=(4, 4)):
    buffer = BytesIO()
    Image.new("RGB", size, color=(120, 120, 120)).save(buffer, format="PNG")
    return SimpleUploadedFile(name, buffer.getvalue(), content_type="image/png")


def test_upload_stores_image_in_folder(api_client, settings):
    response = api_client.post(reverse("api-upload"), {"folder": "accessories", "file": _png()}, format="multipart")

    assert response.status_code == 201, response.json()
    data = response.json()["data"]
    assert data["filename"] == "vaza.png"
    assert data["path"].endswith("/media/accessories/vaza.png")
    assert (settings.MEDIA_ROOT / "accessories" / "vaza.png").exists()


def test_upload_rejects_unknown_folder(api_client, settings):
    response = api_client.post(reverse("api-upload"), {"folder": "../etc", "file": _png()}, format="multipart")

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert not any(settings.MEDIA_ROOT.iterdir())


def test_upload_rejects_non_image_content(api_client):
    fake = SimpleUploadedFile("fake.png", b"not an image", content_type="image/png")

    response = api_client.post(reverse("api-upload"), {"folder": "fences", "file": fake}, format="multipart")

    assert response.status_code == 400
    assert response.json()["error"] == "Файл не является изображением"


def test_middleware_rejects_disallowed_extension(api_client):
    script = SimpleUploadedFile("run.sh", b"echo", content_type="text/x-sh")

    response = api_client.post(reverse("api-upload"), {"folder": "fences", "file": script}, format="multipart")

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_middleware_rejects_oversized_file(api_client, settings):
    settings.MAX_IMAGE_SIZE = 10

    response = api_client.post(reverse("api-upload"), {"folder": "fences", "file": _png()}, format="multipart")

    assert response.status_code == 400


def test_image_listing(api_client, settings):
    folder = settings.MEDIA_ROOT / "fences"
    folder.mkdir()
    (folder / "b.webp").write_bytes(b"x")
    (folder / "a.jpg").write_bytes(b"x")
    (folder / "notes.txt").write_text("x")

    data = api_client.get(reverse("api-images"), {"folder": "fences"}).json()

    assert [url.rsplit("/", 1)[-1] for url in data["data"]] == ["a.jpg", "b.webp"]


def test_image_listing_of_missing_folder_is_empty(api_client):
    data = api_client.get(reverse("api-images"), {"folder": "works"}).json()

    assert data == {"success": True, "data": []}


def test_image_listing_requires_folder(api_client):
    assert api_client.get(reverse("api-images")).status_code == 400
