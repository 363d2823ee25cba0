import os

import pytest

from main import MAX_UPLOAD_SIZE, UPLOAD_DIR


def test_upload_image(client, headers, tmp_path):
    res = client.post(
        "/api/admin/upload",
        files={"file": ("cow.png", b"\x89PNG fake image", "image/png")},
        headers=headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["filename"].endswith(".png")
    assert body["url"] == f"/uploads/{body['filename']}"
    with open(tmp_path / "uploads" / body["filename"], "rb") as f:
        assert f.read() == b"\x89PNG fake image"


def test_upload_names_do_not_collide(client, headers):
    names = {
        client.post("/api/admin/upload", files={"file": ("a.jpg", b"x", "image/jpeg")}, headers=headers).json()["filename"]
        for _ in range(3)
    }
    assert len(names) == 3


def test_upload_rejects_non_images(client, headers, tmp_path):
    res = client.post("/api/admin/upload", files={"file": ("notes.txt", b"hello", "text/plain")}, headers=headers)
    assert res.status_code == 400
    assert not os.path.exists(tmp_path / "uploads")


def test_upload_rejects_oversized(client, headers, tmp_path):
    payload = b"0" * (MAX_UPLOAD_SIZE + 1)
    res = client.post("/api/admin/upload", files={"file": ("big.jpg", payload, "image/jpeg")}, headers=headers)
    assert res.status_code == 400
    assert "too large" in res.json()["detail"]
    assert not os.path.exists(tmp_path / "uploads")


def test_upload_requires_file_and_token(client, headers):
    assert client.post("/api/admin/upload", headers=headers).status_code == 400
    assert client.post("/api/admin/upload", files={"file": ("a.png", b"x", "image/png")}).status_code == 401


@pytest.mark.skipif("UPLOAD_DIR" in os.environ, reason="UPLOAD_DIR overridden by environment")
def test_default_upload_dir_is_relative_to_working_directory():
    assert UPLOAD_DIR == "uploads"
