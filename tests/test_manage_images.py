"""Tests del script de mantenimiento de imágenes."""

import pytest

from vitrina.scripts.manage_images import build_parser, run_command
from vitrina.services import ListingAdminService


@pytest.fixture
def service(fake_db, property_repo, image_repo, storage):
    row = fake_db.add_property(id="p9")
    fake_db.add_images(row["id"], 3)
    return ListingAdminService(property_repo, image_repo, storage)


def run(service, *argv):
    return run_command(build_parser().parse_args(list(argv)), service)


def test_list(service):
    assert [img.id for img in run(service, "list", "p9")] == ["p9-img0", "p9-img1", "p9-img2"]


def test_move_and_promote(service, fake_db):
    run(service, "move", "p9", "p9-img2", "up")
    run(service, "promote", "p9", "p9-img2")
    assert [row["id"] for row in fake_db.image_rows("p9")] == ["p9-img2", "p9-img0", "p9-img1"]


def test_renumber_repairs_gaps(service, fake_db):
    for row, order in zip(fake_db.image_rows("p9"), [0, 5, 9]):
        row["display_order"] = order

    images = run(service, "renumber", "p9")

    assert [img.display_order for img in images] == [0, 1, 2]
    assert [row["display_order"] for row in fake_db.image_rows("p9")] == [0, 1, 2]


def test_explicit_order(service, fake_db):
    run(service, "order", "p9", "p9-img1", "p9-img2", "p9-img0")
    assert fake_db.image_rows("p9")[0]["id"] == "p9-img1"


def test_invalid_direction_rejected_by_parser():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["move", "p9", "p9-img0", "sideways"])
