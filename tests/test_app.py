from __future__ import annotations

import asyncio
import io
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Generator, Optional

import httpx
import pytest
from fastapi import UploadFile
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gnawa_tours import crud, database, models, schemas, utils  # noqa: E402
from gnawa_tours.api import deps  # noqa: E402
from gnawa_tours.api.routes import media as media_routes  # noqa: E402
from gnawa_tours.cache import page_cache  # noqa: E402
from gnawa_tours.config import settings  # noqa: E402
from gnawa_tours.database import Base  # noqa: E402
from gnawa_tours.exceptions import BackendError, UploadRejectedError  # noqa: E402
from gnawa_tours.main import app, get_optional_db  # noqa: E402

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    future=True,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def reset_database() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    page_cache.clear()


reset_database()


def override_get_db() -> Generator[Session, None, None]:
    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    finally:
        db.close()


def override_no_backend() -> Generator[Optional[Session], None, None]:
    yield None


app.dependency_overrides[get_optional_db] = override_get_db


@pytest.fixture
def api_client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    reset_database()
    monkeypatch.setattr(settings, "media_root", tmp_path / "media")
    monkeypatch.setattr(settings, "admin_api_key", None)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def offline_client(api_client: TestClient) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_optional_db] = override_no_backend
    try:
        yield api_client
    finally:
        app.dependency_overrides[get_optional_db] = override_get_db


def create_sample_program(client: TestClient, **overrides) -> int:
    payload = {
        "title": "Tadrart Rouge Expedition",
        "slug": "Tadrart Rouge Expedition",
        "duration": "5 days / 4 nights",
        "price_eur": 1200,
        "price_dzd": 180000,
        "difficulty": "moderate",
        "highlights": ["Red sandstone arches", "  ", "Rock art"],
        "itinerary": [
            {"day": 1, "title": "Arrival in Djanet", "description": "Transfer to hotel."},
            {"day": 2, "title": "Into the Tadrart"},
        ],
        "is_published": True,
    }
    payload.update(overrides)
    response = post_action(client, "/admin/programs", payload)
    return response.json()["id"]


def post_action(client: TestClient, url: str, payload: dict) -> httpx.Response:
    response = client.post(url, json=payload)
    assert response.status_code == 200, response.text
    assert response.json()["success"] is True
    return response


def booking_payload(**overrides) -> dict:
    payload = {
        "full_name": "John Doe",
        "email": "john@example.com",
        "phone": "+213555123456",
        "group_size": 2,
        "message": "We would love to join the autumn departure.",
    }
    payload.update(overrides)
    return payload


def test_submit_booking_end_to_end(api_client: TestClient) -> None:
    response = api_client.post("/api/bookings", json=booking_payload())
    assert response.status_code == 200
    assert response.json() == {"success": True}

    bookings = api_client.get("/admin/bookings").json()
    assert len(bookings) == 1
    assert bookings[0]["full_name"] == "John Doe"
    assert bookings[0]["status"] == "new"
    assert bookings[0]["origin_country"] == "INTL"


def test_submit_booking_rejects_invalid_email(api_client: TestClient) -> None:
    response = api_client.post("/api/bookings", json=booking_payload(email="not-an-email"))
    assert response.status_code == 400
    assert response.json()["error"].startswith("email:")


def test_submit_booking_rejects_short_name(api_client: TestClient) -> None:
    response = api_client.post("/api/bookings", json=booking_payload(full_name="A"))
    assert response.status_code == 400
    assert response.json()["error"].startswith("full_name:")


@pytest.mark.parametrize(
    "group_size, expected_status",
    [(20, 200), (21, 400), (0, 400), ("5", 400), (True, 400), (2.0, 400)],
)
def test_group_size_boundaries(
    api_client: TestClient, group_size: object, expected_status: int
) -> None:
    response = api_client.post("/api/bookings", json=booking_payload(group_size=group_size))
    assert response.status_code == expected_status


def test_group_size_defaults_to_one(api_client: TestClient) -> None:
    payload = booking_payload()
    payload.pop("group_size")
    payload.update(phone="", message="", program_id="", origin_country="dz")
    assert api_client.post("/api/bookings", json=payload).status_code == 200

    booking = api_client.get("/admin/bookings").json()[0]
    assert booking["group_size"] == 1
    assert booking["phone"] is None
    assert booking["message"] is None
    assert booking["program_id"] is None
    assert booking["origin_country"] == "DZ"


def test_booking_acknowledged_without_backend(offline_client: TestClient) -> None:
    response = offline_client.post("/api/bookings", json=booking_payload())
    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_booking_without_backend_can_be_refused(
    offline_client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "accept_bookings_without_backend", False)
    response = offline_client.post("/api/bookings", json=booking_payload())
    assert response.status_code == 503
    assert response.json() == {"error": "Persistence backend is not configured"}


def test_admin_requires_backend(offline_client: TestClient) -> None:
    response = offline_client.get("/admin/programs")
    assert response.status_code == 503
    assert "error" in response.json()


def test_landing_page_falls_back_to_defaults(offline_client: TestClient) -> None:
    response = offline_client.get("/")
    assert response.status_code == 200
    assert "Tadrart Rouge Expedition" in response.text
    assert "Discover the Algerian Sahara" in response.text
    assert 'id="why-choose-us"' in response.text


def test_program_itinerary_entries_without_title_are_dropped(api_client: TestClient) -> None:
    program_id = create_sample_program(
        api_client,
        itinerary=[
            {"day": 1, "title": "Arrival"},
            {"day": 2, "title": "   "},
            {"day": "two", "title": "Dunes"},
            {"title": "No day"},
        ],
    )
    program = api_client.get(f"/admin/programs/{program_id}").json()
    assert program["itinerary"] == [{"day": 1, "title": "Arrival", "description": ""}]
    assert program["slug"] == "tadrart-rouge-expedition"
    assert program["highlights"] == ["Red sandstone arches", "Rock art"]


def test_program_slugs_stay_unique(api_client: TestClient) -> None:
    first = create_sample_program(api_client)
    second = create_sample_program(api_client)
    slugs = {
        program["id"]: program["slug"] for program in api_client.get("/admin/programs").json()
    }
    assert slugs[first] == "tadrart-rouge-expedition"
    assert slugs[second] == "tadrart-rouge-expedition-1"


def test_program_prices_are_validated(api_client: TestClient) -> None:
    program_id = create_sample_program(api_client, price_eur="abc")
    assert api_client.get(f"/admin/programs/{program_id}").json()["price_eur"] == 0

    response = api_client.post(
        "/admin/programs",
        json={"title": "X", "slug": "x", "duration": "1 day", "difficulty": "easy", "price_dzd": -5},
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("price_dzd:")


def test_program_end_date_must_follow_start(api_client: TestClient) -> None:
    response = api_client.post(
        "/admin/programs",
        json={
            "title": "Ihrir",
            "slug": "ihrir",
            "duration": "4 days",
            "difficulty": "easy",
            "start_date": "2026-11-17",
            "end_date": "2026-11-14",
        },
    )
    assert response.status_code == 400


def test_program_publish_toggle_and_delete(api_client: TestClient) -> None:
    program_id = create_sample_program(api_client)
    response = api_client.patch(
        f"/admin/programs/{program_id}/publish", json={"is_published": False}
    )
    assert response.json() == {"success": True, "id": program_id}
    assert api_client.get("/api/content").json()["programs"] == []

    assert api_client.delete(f"/admin/programs/{program_id}").json()["success"] is True
    missing = api_client.get(f"/admin/programs/{program_id}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Program not found"}


def test_section_preview_resolves_content(api_client: TestClient) -> None:
    grid_id = post_action(
        api_client,
        "/admin/sections",
        {"section_key": "Why Us", "title": "Why Choose Us", "layout_type": "grid", "content": None},
    ).json()["id"]
    preview = api_client.get(f"/admin/sections/{grid_id}/preview").json()
    assert preview["section"]["content"] == {"kind": "grid", "cards": []}
    assert preview["section"]["nav_title"] == "Why Choose Us"
    assert preview["section"]["section_key"] == "why-us"
    assert 'id="why-us"' in preview["html"]

    quotes_id = post_action(
        api_client,
        "/admin/sections",
        {
            "section_key": "voices",
            "title": "Voices",
            "layout_type": "text-right",
            "display_order": 3,
            "content": {"quotes": [{"name": "Sarah", "text": "Unforgettable.", "rating": 9}]},
        },
    ).json()["id"]
    section = api_client.get(f"/admin/sections/{quotes_id}/preview").json()["section"]
    assert section["content"]["kind"] == "testimonials"
    assert section["content"]["quotes"][0]["rating"] == 5
    assert section["chapter"] == "05"


def test_section_visibility_controls_public_content(api_client: TestClient) -> None:
    section_id = post_action(
        api_client,
        "/admin/sections",
        {
            "section_key": "story",
            "title": "Our Story",
            "layout_type": "centered",
            "content": {"text": "Born in the Sahara."},
        },
    ).json()["id"]
    assert [s["section_key"] for s in api_client.get("/api/content").json()["sections"]] == ["story"]

    api_client.patch(f"/admin/sections/{section_id}/visibility", json={"is_visible": False})
    assert api_client.get("/api/content").json()["sections"] == []


def test_settings_upsert_keeps_one_row(api_client: TestClient) -> None:
    api_client.put("/admin/settings/site_name", json={"value": "Desert Voices"})
    response = api_client.put("/admin/settings/site_name", json={"value": "Gnawa Expeditions"})
    assert response.status_code == 200
    api_client.put("/admin/settings/showcase_images", json={"value": "a.jpg, b.jpg,,"})
    api_client.put("/admin/settings/ambient_music_enabled", json={"value": "yes"})

    stored = api_client.get("/admin/settings").json()
    assert [item["key"] for item in stored] == [
        "ambient_music_enabled",
        "showcase_images",
        "site_name",
    ]
    site = api_client.get("/api/content").json()["site"]
    assert site["site_name"] == "Gnawa Expeditions"
    assert site["showcase_images"] == ["a.jpg", "b.jpg"]
    assert site["ambient_music_enabled"] is True


def test_hero_settings_defaults_and_update(api_client: TestClient) -> None:
    hero = api_client.get("/admin/hero").json()
    assert hero["headline"] == "Discover the Algerian Sahara"
    assert hero["overlay_opacity"] == 0.45

    rejected = api_client.put("/admin/hero", json={"headline": "Sahara", "overlay_opacity": 1.5})
    assert rejected.status_code == 400

    api_client.put("/admin/hero", json={"headline": "Sahara Nights", "overlay_opacity": 0.6})
    api_client.put("/admin/hero", json={"headline": "Sahara Days", "overlay_opacity": 0.3})
    hero = api_client.get("/admin/hero").json()
    assert hero["headline"] == "Sahara Days"
    assert hero["overlay_opacity"] == 0.3


def upload_sample_image(client: TestClient) -> dict:
    image = Image.new("RGB", (32, 24), color=(194, 98, 45))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    buffer.seek(0)
    response = client.post("/api/upload", files={"file": ("dunes.png", buffer, "image/png")})
    buffer.close()
    assert response.status_code == 200, response.text
    return response.json()


def stored_media_files() -> list[Path]:
    if not settings.media_root.exists():
        return []
    return [path for path in settings.media_root.rglob("*") if path.is_file()]


def test_upload_records_media_item(api_client: TestClient) -> None:
    body = upload_sample_image(api_client)
    assert body["success"] is True
    assert body["url"].startswith("/media/images/")

    items = api_client.get("/admin/media").json()
    assert len(items) == 1
    assert items[0]["kind"] == "image"
    assert (items[0]["width"], items[0]["height"]) == (32, 24)
    assert api_client.get("/admin/media", params={"kind": "audio"}).json() == []

    stored = settings.media_root / body["url"].removeprefix("/media/")
    assert stored.exists()

    updated = api_client.patch(f"/admin/media/{body['id']}", json={"alt_text": "Dunes at dusk"})
    assert updated.json()["alt_text"] == "Dunes at dusk"

    assert api_client.delete(f"/admin/media/{body['id']}").json()["success"] is True
    assert not stored.exists()
    assert api_client.get("/admin/media").json() == []


def test_upload_rejects_unsupported_files(api_client: TestClient) -> None:
    text = api_client.post("/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert text.status_code == 400
    assert "image or audio" in text.json()["error"]

    broken = api_client.post("/api/upload", files={"file": ("fake.png", b"not a png", "image/png")})
    assert broken.status_code == 400

    empty = api_client.post("/api/upload", files={"file": ("silence.mp3", b"", "audio/mpeg")})
    assert empty.status_code == 400


def test_upload_enforces_size_ceiling(
    api_client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "max_upload_bytes", 8)
    response = api_client.post(
        "/api/upload", files={"file": ("track.mp3", b"0123456789", "audio/mpeg")}
    )
    assert response.status_code == 400
    assert "maximum allowed size" in response.json()["error"]
    assert stored_media_files() == []


def test_upload_reading_stops_past_size_ceiling(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "max_upload_bytes", 100_000)
    source = io.BytesIO(b"x" * 400_000)
    upload = UploadFile(file=source, filename="long-track.mp3")

    with pytest.raises(UploadRejectedError):
        asyncio.run(media_routes._read_bounded(upload))
    assert source.tell() < 400_000


def test_removing_missing_media_file_is_a_no_op(api_client: TestClient) -> None:
    utils.remove_media_file("images/already-gone.png")
    utils.remove_media_file(None)
    assert stored_media_files() == []


def test_upload_rejects_svg_images(api_client: TestClient) -> None:
    svg = b'<svg xmlns="http://www.w3.org/2000/svg"><script>alert(1)</script></svg>'
    response = api_client.post("/api/upload", files={"file": ("logo.svg", svg, "image/svg+xml")})
    assert response.status_code == 400
    assert response.json() == {"error": "SVG images are not accepted"}
    assert stored_media_files() == []
    assert api_client.get("/admin/media").json() == []


def test_upload_removes_file_when_record_fails(
    api_client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing_create(*args, **kwargs):
        raise OperationalError("INSERT INTO media_items", {}, Exception("db down"))

    monkeypatch.setattr(crud, "create_media_item", failing_create)
    response = api_client.post(
        "/api/upload", files={"file": ("chant.mp3", b"ID3 gnawa chant", "audio/mpeg")}
    )
    assert response.status_code == 500
    assert response.json() == {"error": "db down"}
    assert stored_media_files() == []


def test_media_file_kept_when_delete_fails(
    api_client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    body = upload_sample_image(api_client)
    stored = settings.media_root / body["url"].removeprefix("/media/")

    def failing_delete(self, instance):
        raise OperationalError("DELETE FROM media_items", {}, Exception("database is locked"))

    with monkeypatch.context() as patch:
        patch.setattr(Session, "delete", failing_delete)
        response = api_client.delete(f"/admin/media/{body['id']}")
    assert response.status_code == 500
    assert response.json() == {"error": "database is locked"}

    assert stored.exists()
    assert [item["id"] for item in api_client.get("/admin/media").json()] == [body["id"]]


def test_backend_failure_returns_backend_message(
    api_client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing_create(*args, **kwargs):
        raise OperationalError("INSERT INTO bookings", {}, Exception("disk I/O error"))

    monkeypatch.setattr(crud, "create_booking", failing_create)
    monkeypatch.setattr(database, "SessionLocal", TestingSessionLocal)
    monkeypatch.delitem(app.dependency_overrides, get_optional_db)

    response = api_client.post("/api/bookings", json=booking_payload())
    assert response.status_code == 500
    assert response.json() == {"error": "disk I/O error"}

    listing = api_client.get("/admin/bookings")
    assert listing.status_code == 200
    assert listing.json() == []


def test_session_dependency_converts_backend_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(database, "SessionLocal", TestingSessionLocal)
    dependency = deps.get_optional_db()
    session = next(dependency)
    assert isinstance(session, Session)

    with pytest.raises(BackendError) as excinfo:
        dependency.throw(OperationalError("UPDATE bookings", {}, Exception("disk I/O error")))
    assert excinfo.value.message == "disk I/O error"
    assert excinfo.value.status_code == 500


def test_admin_key_guards_admin_routes(
    api_client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "admin_api_key", "sahara-secret")
    denied = api_client.get("/admin/programs")
    assert denied.status_code == 403
    assert denied.json() == {"error": "Admin privileges required"}

    allowed = api_client.get("/admin/programs", headers={"X-Admin-Key": "sahara-secret"})
    assert allowed.status_code == 200
    assert api_client.post("/api/bookings", json=booking_payload()).status_code == 200


def test_booking_status_filter_and_search(api_client: TestClient) -> None:
    program_id = create_sample_program(api_client)
    api_client.post("/api/bookings", json=booking_payload(program_id=program_id))
    api_client.post(
        "/api/bookings",
        json=booking_payload(full_name="Amina Haddad", email="amina@example.dz"),
    )
    bookings = api_client.get("/admin/bookings", params={"search": "AMINA"}).json()
    assert [booking["full_name"] for booking in bookings] == ["Amina Haddad"]

    john = api_client.get("/admin/bookings", params={"search": "john"}).json()[0]
    assert john["program_title"] == "Tadrart Rouge Expedition"
    assert john["program_price_eur"] == 1200

    response = api_client.patch(f"/admin/bookings/{john['id']}/status", json={"status": "confirmed"})
    assert response.status_code == 200
    confirmed = api_client.get("/admin/bookings", params={"status": "confirmed"}).json()
    assert [booking["id"] for booking in confirmed] == [john["id"]]

    invalid = api_client.patch(f"/admin/bookings/{john['id']}/status", json={"status": "archived"})
    assert invalid.status_code == 400
    missing = api_client.patch("/admin/bookings/999/status", json={"status": "new"})
    assert missing.json() == {"error": "Booking not found"}


def test_dashboard_overview(api_client: TestClient) -> None:
    program_id = create_sample_program(api_client)
    api_client.post(
        "/api/bookings",
        json=booking_payload(program_id=program_id, origin_country="DZ", group_size=2),
    )
    api_client.post("/api/bookings", json=booking_payload(program_id=program_id, group_size=1))
    booking_id = api_client.get("/admin/bookings", params={"search": "john"}).json()[-1]["id"]
    api_client.patch(f"/admin/bookings/{booking_id}/status", json={"status": "confirmed"})

    today = date.today()
    overview = api_client.get(
        "/admin/dashboard",
        params={"start": str(today - timedelta(days=1)), "end": str(today + timedelta(days=1))},
    ).json()
    metrics = overview["metrics"]
    assert metrics["total_bookings"] == 2
    assert metrics["confirmed_value_dzd"] == 360000
    assert metrics["confirmed_value_eur"] == 0
    assert metrics["pipeline_value_eur"] == 1200
    assert metrics["conversion_rate"] == 50
    assert metrics["granularity"] == "day"
    assert len(metrics["series"]) == 3
    assert overview["bookings_last_7"] == 2
    assert overview["published_programs"] == 1
    assert len(overview["recent_bookings"]) == 2


def test_landing_page_prices_by_region_and_revalidates(api_client: TestClient) -> None:
    create_sample_program(api_client)

    algeria = api_client.get("/", headers={"cf-ipcountry": "DZA"})
    assert "180,000 DZD" in algeria.text
    assert 'name="origin_country" value="DZ"' in algeria.text

    europe = api_client.get("/", headers={"x-vercel-ip-country": "fr"})
    assert "1,200" in europe.text
    assert "DZD" not in europe.text

    create_sample_program(api_client, title="Ihrir Oasis", slug="ihrir")
    assert "Ihrir Oasis" in api_client.get("/", headers={"cf-ipcountry": "DZA"}).text


def test_landing_page_is_cached_until_mutation(api_client: TestClient) -> None:
    api_client.get("/")
    with TestingSessionLocal() as session:
        crud.create_program(
            session,
            schemas.ProgramCreate(
                title="Hidden Change",
                slug="hidden",
                duration="1 day",
                difficulty="easy",
                is_published=True,
            ),
        )
        session.commit()
    assert "Hidden Change" not in api_client.get("/").text

    api_client.put("/admin/settings/site_name", json={"value": "Gnawa"})
    assert "Hidden Change" in api_client.get("/").text


@pytest.fixture
def file_backed_client(
    api_client: TestClient, tmp_path: Path
) -> Generator[TestClient, None, None]:
    file_engine = create_engine(
        f"sqlite:///{tmp_path / 'gnawa.db'}",
        connect_args={"check_same_thread": False},
        future=True,
    )
    Base.metadata.create_all(bind=file_engine)
    FileSessionLocal = sessionmaker(bind=file_engine, autoflush=False, autocommit=False, future=True)

    def override_file_db() -> Generator[Session, None, None]:
        db = FileSessionLocal()
        try:
            yield db
            db.commit()
        finally:
            db.close()

    app.dependency_overrides[get_optional_db] = override_file_db
    try:
        yield api_client
    finally:
        app.dependency_overrides[get_optional_db] = override_get_db
        file_engine.dispose()


def test_landing_page_not_recached_before_commit(
    file_backed_client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    assert "Ihrir Oasis" not in file_backed_client.get("/").text

    visible_on_revalidate: list[bool] = []
    revalidate = page_cache.revalidate

    def revalidate_then_render(*paths: str) -> None:
        revalidate(*paths)
        if "/" in paths:
            visible_on_revalidate.append("Ihrir Oasis" in file_backed_client.get("/").text)

    monkeypatch.setattr(page_cache, "revalidate", revalidate_then_render)
    create_sample_program(file_backed_client, title="Ihrir Oasis", slug="ihrir")

    assert visible_on_revalidate == [True]
    assert "Ihrir Oasis" in file_backed_client.get("/").text


def test_stored_program_with_malformed_fields_still_renders(api_client: TestClient) -> None:
    with TestingSessionLocal() as session:
        session.add(
            models.Program(
                title="Imported Erg Crossing",
                slug="imported-erg",
                duration="3 days",
                difficulty="easy",
                highlights=["Star dunes", 7, None, "  "],
                itinerary=[
                    {"day": 0, "title": "Before departure"},
                    {"day": 1, "title": ""},
                    "free text",
                    {"day": 2, "title": "Erg Admer"},
                ],
                gallery_urls="not-a-list",
                is_published=True,
            )
        )
        session.commit()

    landing = api_client.get("/")
    assert landing.status_code == 200
    assert "Imported Erg Crossing" in landing.text

    content = api_client.get("/api/content")
    assert content.status_code == 200
    program = next(p for p in content.json()["programs"] if p["slug"] == "imported-erg")
    assert program["highlights"] == ["Star dunes"]
    assert program["itinerary"] == [{"day": 2, "title": "Erg Admer", "description": ""}]
    assert program["gallery_urls"] == []


def test_healthcheck(api_client: TestClient) -> None:
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
