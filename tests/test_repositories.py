"""Tests de repositorios y Storage contra el cliente en memoria."""

import pytest

from vitrina.database import PropertyImageRepository, UserRoleRepository
from vitrina.errors import StorageUploadError
from vitrina.images import promote_to_first
from vitrina.models import ContactMessage, ListingImage


def test_list_all_newest_first_with_images(fake_db, property_repo):
    old = fake_db.add_property(title="Antigo", created_at="2023-01-01T00:00:00+00:00")
    new = fake_db.add_property(title="Novo", created_at="2024-06-01T00:00:00+00:00")
    fake_db.add_images(new["id"], 2)

    rows = property_repo.list_all()

    assert [row["id"] for row in rows] == [new["id"], old["id"]]
    assert len(rows[0]["property_images"]) == 2
    assert rows[1]["property_images"] == []


def test_list_all_only_available(fake_db, property_repo):
    fake_db.add_property(status="vendido")
    available = fake_db.add_property(status="disponivel")

    rows = property_repo.list_all(only_available=True)
    assert [row["id"] for row in rows] == [available["id"]]


def test_list_featured(fake_db, property_repo):
    for day in range(1, 6):
        fake_db.add_property(is_featured=True, created_at=f"2024-01-0{day}T00:00:00+00:00")
    fake_db.add_property(is_featured=True, status="alugado")
    fake_db.add_property(is_featured=False)

    rows = property_repo.list_featured(limit=3)
    assert len(rows) == 3
    assert [row["created_at"][:10] for row in rows] == ["2024-01-05", "2024-01-04", "2024-01-03"]


def test_get_update_delete(fake_db, property_repo):
    row = fake_db.add_property(title="Casa")

    assert property_repo.get_by_id(row["id"])["title"] == "Casa"
    assert property_repo.get_by_id("missing") is None

    assert property_repo.update(row["id"], {"title": "Casa Reformada"})["title"] == "Casa Reformada"
    assert property_repo.update("missing", {"title": "x"}) is None

    assert property_repo.delete(row["id"]) is True
    assert property_repo.delete(row["id"]) is False


def test_create_returns_row_with_id(property_repo):
    created = property_repo.create({"title": "Terreno", "type": "terreno"})
    assert created["id"]
    assert created["title"] == "Terreno"


def test_list_for_property_ordered(fake_db, image_repo):
    rows = fake_db.add_images("p1", 3)
    rows[0]["display_order"], rows[2]["display_order"] = 2, 0

    listed = image_repo.list_for_property("p1")
    assert [row["id"] for row in listed] == ["p1-img2", "p1-img1", "p1-img0"]


def test_update_image_order_writes_each_row(fake_db, image_repo):
    fake_db.add_images("p1", 3)
    current = [ListingImage(**row) for row in fake_db.image_rows("p1")]

    image_repo.update_image_order(promote_to_first(current, "p1-img2"))

    stored = fake_db.image_rows("p1")
    assert [row["id"] for row in stored] == ["p1-img2", "p1-img0", "p1-img1"]
    assert [row["is_primary"] for row in stored] == [True, False, False]
    assert fake_db.count_calls("property_images", "update") == 3


def test_update_image_order_retries_transient_failure(fake_db, image_repo):
    fake_db.add_images("p1", 2)
    current = [ListingImage(**row) for row in fake_db.image_rows("p1")]
    fake_db.fail("property_images", "update", times=2)

    image_repo.update_image_order(promote_to_first(current, "p1-img1"))

    assert fake_db.image_rows("p1")[0]["id"] == "p1-img1"
    assert fake_db.count_calls("property_images", "update") == 4


def test_update_image_order_gives_up_after_attempts(fake_db, client):
    repo = PropertyImageRepository(client, retry_attempts=2, retry_backoff=0)
    fake_db.add_images("p1", 2)
    current = [ListingImage(**row) for row in fake_db.image_rows("p1")]
    fake_db.fail("property_images", "update", times=5)

    with pytest.raises(RuntimeError):
        repo.update_image_order(promote_to_first(current, "p1-img1"))
    assert fake_db.count_calls("property_images", "update") == 2


def test_create_many_and_delete(fake_db, image_repo):
    created = image_repo.create_many([
        ListingImage(property_id="p1", image_url="https://cdn/a.jpg", display_order=0, is_primary=True),
        ListingImage(property_id="p1", image_url="https://cdn/b.jpg", display_order=1),
    ])
    assert all(row["id"] for row in created)
    assert image_repo.create_many([]) == []

    assert image_repo.delete(created[0]["id"]) is True
    assert len(image_repo.delete_for_property("p1")) == 1
    assert fake_db.image_rows("p1") == []


def test_is_admin(fake_db, client):
    repo = UserRoleRepository(client)
    fake_db.grant_admin("u1")
    fake_db.tables["user_roles"].append({"user_id": "u2", "role": "user"})

    assert repo.is_admin("u1") is True
    assert repo.is_admin("u2") is False


def test_contact_repository(fake_db, contact_repo):
    message = ContactMessage(
        name="João", email="joao@example.com", phone="11 99999-0000", message="Olá"
    )
    stored = contact_repo.create(message)
    assert stored["id"]
    assert fake_db.tables["contact_messages"][0]["email"] == "joao@example.com"


def test_storage_upload_and_remove(fake_db, storage):
    url = storage.upload("p1", b"data", "Foto Sala.PNG")

    path = storage.path_from_url(url)
    assert path.startswith("p1/") and path.endswith(".png")
    assert fake_db.objects[path] == b"data"

    storage.remove([url, "https://elsewhere/x.jpg"])
    assert path not in fake_db.objects


def test_storage_upload_failure(fake_db, storage):
    fake_db.fail_uploads = True
    with pytest.raises(StorageUploadError):
        storage.upload("p1", b"data", "foto.jpg")


def test_path_from_url_ignores_query_and_other_buckets(storage):
    base = "https://fake.supabase.co/storage/v1/object/public/"
    assert storage.path_from_url(base + "property-images/p1/a.jpg?t=1") == "p1/a.jpg"
    assert storage.path_from_url(base + "avatars/a.jpg") is None
