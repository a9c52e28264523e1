"""Тесты JSON API через тестовый клиент Flask."""

from __future__ import annotations

import base64
import io

import pytest

from app import create_app
from config import Config
from conftest import make_image_bytes


def _upload(client, content: bytes, filename: str = "photo.png", **fields):
    data = {"image": (io.BytesIO(content), filename), **fields}
    return client.post("/api/upload", data=data, content_type="multipart/form-data")


def test_health_returns_ok(client) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_upload_extracts_palette(client, two_tone_png) -> None:
    response = _upload(client, two_tone_png)

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["palette"] == ["#202020", "#ff0000"]
    assert body["share"] == "202020,ff0000"


def test_upload_respects_color_count(client, two_tone_png) -> None:
    response = _upload(client, two_tone_png, color_count="1")

    assert response.get_json()["palette"] == ["#202020"]


def test_upload_accepts_data_url(client, two_tone_png) -> None:
    data_url = "data:image/png;base64," + base64.b64encode(two_tone_png).decode("ascii")
    response = client.post("/api/upload", json={"image_data": data_url, "color_count": 1})

    assert response.status_code == 200
    assert response.get_json()["palette"] == ["#202020"]


def test_upload_rejects_non_image(client) -> None:
    response = _upload(client, b"plain text pretending to be png")

    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_upload_rejects_extension(client) -> None:
    response = _upload(client, make_image_bytes(), filename="notes.txt")

    assert response.status_code == 400


def test_upload_requires_file(client) -> None:
    response = client.post("/api/upload", data={}, content_type="multipart/form-data")

    assert response.status_code == 400


def test_upload_rejects_too_many_pixels(app, client) -> None:
    app.config["MAX_IMAGE_PIXELS"] = 50
    response = _upload(client, make_image_bytes(size=(10, 10)))

    assert response.status_code == 400


def test_color_formats(client) -> None:
    response = client.get("/api/colors/formats", query_string={"color": "red"})

    assert response.status_code == 200
    assert response.get_json()["formats"]["rgb"] == "rgb(255, 0, 0)"


def test_color_formats_surface_parse_error(client) -> None:
    response = client.get("/api/colors/formats", query_string={"color": "nope"})

    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_harmony_all_kinds(client) -> None:
    response = client.get("/api/colors/harmony", query_string={"color": "#3a7bd5"})
    harmonies = response.get_json()["harmonies"]

    assert set(harmonies) == {"analogous", "triadic", "complementary", "shades", "tones"}
    assert len(harmonies["complementary"]) == 1


def test_harmony_single_kind_and_unknown(client) -> None:
    ok = client.get("/api/colors/harmony", query_string={"color": "#3a7bd5", "kind": "shades"})
    bad = client.get("/api/colors/harmony", query_string={"color": "#3a7bd5", "kind": "tetrad"})

    assert len(ok.get_json()["harmonies"]["shades"]) == 3
    assert bad.status_code == 400


def test_adjust_identity(client) -> None:
    response = client.post("/api/colors/adjust", json={"color": "#f27d26"})

    assert response.get_json()["color"] == "#f27d26"


def test_adjust_rejects_non_numeric(client) -> None:
    response = client.post("/api/colors/adjust", json={"color": "#f27d26", "brightness": "up"})

    assert response.status_code == 400


def test_contrast(client) -> None:
    response = client.get("/api/contrast", query_string={"foreground": "#ffffff", "background": "#000000"})

    assert response.get_json() == {"success": True, "ratio": 21.0, "aa": True, "aaa": True, "aaLarge": True}


def test_state_action(client) -> None:
    response = client.post(
        "/api/state",
        json={
            "state": {"palette": ["#111111", "#222222"], "selected": "#222222"},
            "action": {"type": "edit_selected", "color": "#abcdef"},
        },
    )
    body = response.get_json()

    assert response.status_code == 200
    assert body["state"]["palette"] == ["#111111", "#abcdef"]
    assert body["adjusted"] == "#abcdef"
    assert body["share"] == "111111,abcdef"
    assert set(body["variations"]) == {"analogous", "triadic", "shades", "tones"}


def test_state_defaults_and_bad_action(client) -> None:
    default = client.post("/api/state", json={})
    bad = client.post("/api/state", json={"action": {"type": "explode"}})

    assert default.get_json()["state"]["selected"] == "#141414"
    assert bad.status_code == 400


def test_share_and_restore(client) -> None:
    colors = ["#000000", "#111111", "#222222", "#333333", "#444444"]
    shared = client.post("/api/palette/share", json={"colors": colors}).get_json()
    restored = client.get("/api/palette/restore", query_string={"colors": shared["share"]}).get_json()

    assert shared["query"] == "?colors=000000,111111,222222,333333,444444"
    assert restored["palette"] == colors


def test_restore_falls_back_to_default(client) -> None:
    restored = client.get("/api/palette/restore", query_string={"colors": "abc,def"}).get_json()

    assert restored["palette"] == ["#141414", "#f27d26", "#e4e3e0", "#8e9299", "#ffffff"]


def test_export_css_download(client) -> None:
    response = client.post("/api/export?format=css", json={"colors": ["#141414", "#f27d26"]})

    assert response.status_code == 200
    assert response.mimetype == "text/css"
    assert "colores.css" in response.headers["Content-Disposition"]
    assert b"--color-2: #f27d26;" in response.data


def test_export_rejects_bad_input(client) -> None:
    unknown = client.post("/api/export?format=aco", json={"colors": ["#141414"]})
    broken = client.post("/api/export?format=css", json={"colors": ["not-a-color"]})

    assert unknown.status_code == 400
    assert broken.status_code == 400


def test_adjust_rejects_non_finite_numbers(client) -> None:
    # 1e309 переполняет double и разбирается json как бесконечность
    response = client.post(
        "/api/colors/adjust",
        data='{"color": "#ff0000", "warmth": 1e309}',
        content_type="application/json",
    )

    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_adjust_accepts_huge_saturation(client) -> None:
    response = client.post("/api/colors/adjust", json={"color": "#ff0000", "saturation": 1e300})

    assert response.status_code == 200
    assert response.get_json()["success"] is True


def test_state_rejects_non_list_palettes(client) -> None:
    state = client.post("/api/state", json={"state": {"palette": 5}})
    action = client.post("/api/state", json={"action": {"type": "load_palette", "colors": 5}})
    warmth = client.post(
        "/api/state",
        data='{"action": {"type": "adjust", "warmth": 1e309}}',
        content_type="application/json",
    )

    assert state.status_code == 400
    assert action.status_code == 400
    assert warmth.status_code == 400


def test_suggested_palettes(client) -> None:
    body = client.get("/api/palette/suggestions").get_json()

    assert body["success"] is True
    assert [item["name"] for item in body["suggestions"]] == ["Sugerencia 1", "Sugerencia 2", "Sugerencia 3"]
    assert body["suggestions"][0]["palette"] == ["#2c3e50", "#e74c3c", "#ecf0f1", "#3498db", "#2980b9"]
    assert body["suggestions"][2]["share"] == "2d5a27,f1c40f,ffffff,e67e22,d35400"


def test_suggested_palette_loads_into_state(client) -> None:
    suggestion = client.get("/api/palette/suggestions").get_json()["suggestions"][1]
    response = client.post(
        "/api/state",
        json={"action": {"type": "load_palette", "colors": suggestion["palette"]}},
    )

    assert response.get_json()["state"]["palette"] == ["#1b1b1b", "#ffd700", "#f5f5f5", "#c0c0c0", "#808080"]
    assert response.get_json()["state"]["selected"] == "#1b1b1b"


def test_configured_palettes_are_normalized() -> None:
    class UpperCaseConfig(Config):
        DEFAULT_PALETTE = ["#FFF", "red", "#141414", "#8E9299", "#000000"]

    application = create_app(UpperCaseConfig)
    restored = application.test_client().get("/api/palette/restore").get_json()

    assert restored["palette"] == ["#ffffff", "#ff0000", "#141414", "#8e9299", "#000000"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"DEFAULT_PALETTE": ["#141414", "not-a-color"]},
        {"DEFAULT_PALETTE": []},
        {"SUGGESTED_PALETTES": [["#141414", "#zzzzzz"]]},
    ],
)
def test_invalid_configured_palette_fails_at_startup(overrides) -> None:
    broken = type("BrokenConfig", (Config,), overrides)

    with pytest.raises(RuntimeError):
        create_app(broken)
