from datetime import date

import pytest
from fastapi.testclient import TestClient

from travel_admin.config import ProposalSettings
from travel_admin.errors import RenderError
from travel_admin.main import create_app
from travel_admin.models import Destination, GenerationType, PdfAudit

TODAY = date(2025, 1, 5)


class FakePdfRenderer:
    """Stands in for headless Chromium: the "PDF" embeds the rendered HTML."""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    async def render(self, html):
        self.calls.append(html)
        if self.error is not None:
            raise self.error
        return b"%PDF-1.4\n" + html.encode("utf-8") + b"\n%%EOF\n"


@pytest.fixture()
def renderer():
    return FakePdfRenderer()


@pytest.fixture()
def settings(tmp_path):
    return ProposalSettings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        output_dir=tmp_path / "generated-pdfs",
    )


@pytest.fixture()
def client(settings, renderer):
    app = create_app(settings, pdf_renderer=renderer)
    with TestClient(app) as c:
        app.state.pipeline.today = lambda: TODAY
        yield c


def _payload(**form_overrides):
    form = {
        "customerInfo": {"customerName": "Alice Smith", "totalTravelers": 2},
        "tripDetails": {"packageTitle": "Bali Escape", "destination": "Bali, Indonesia", "duration": "5 Days, 4 Nights"},
        "pricing": {"totalPackagePrice": 45000, "currency": "INR"},
        "itinerary": [{"dayNumber": 1, "dayTitle": "Arrival"}],
    }
    for section, values in form_overrides.items():
        form[section] = {**form[section], **values}
    return {"formData": form, "generationType": "scratch"}


def _audit_rows(client):
    db = client.app.state.database.session()
    try:
        return db.query(PdfAudit).all()
    finally:
        db.close()


def test_end_to_end_generation(client, settings):
    resp = client.post("/generate-proposal", json=_payload())
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["filename"] == "Travel_Proposal_Alice_Smith_2025-01-05.pdf"
    assert body["downloadUrl"] == "/generated-pdfs/Travel_Proposal_Alice_Smith_2025-01-05.pdf"
    assert body["fileSize"] > 0
    assert body["message"] == "PDF generated successfully"

    pdf = client.get(body["downloadUrl"])
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.content.startswith(b"%PDF")
    assert b"Bali Escape" in pdf.content
    assert b"45,000" in pdf.content
    assert (settings.output_dir / body["filename"]).is_file()


def test_original_admin_route_is_equivalent(client):
    resp = client.post("/api/admin/generate-pdf", json=_payload())
    assert resp.status_code == 200
    assert resp.json()["filename"] == "Travel_Proposal_Alice_Smith_2025-01-05.pdf"


def test_audit_row_written(client):
    resp = client.post(
        "/generate-proposal",
        json={**_payload(), "generationType": "prepopulated", "packageId": 4},
        headers={"X-Admin-User": "ops@agency.test"},
    )
    assert resp.status_code == 200
    rows = _audit_rows(client)
    assert len(rows) == 1
    row = rows[0]
    assert row.admin_user_id == "ops@agency.test"
    assert row.customer_name == "Alice Smith"
    assert row.package_id == 4
    assert row.generation_type == GenerationType.PREPOPULATED
    assert row.pdf_filename == resp.json()["filename"]
    assert row.file_size_kb == resp.json()["fileSize"]
    assert row.download_count == 0
    assert row.form_data["tripDetails"]["packageTitle"] == "Bali Escape"


def test_default_actor_used_without_header(client):
    client.post("/generate-proposal", json=_payload())
    assert _audit_rows(client)[0].admin_user_id == "admin-user"


def test_audit_failure_does_not_fail_response(client):
    PdfAudit.__table__.drop(client.app.state.database.engine)
    resp = client.post("/generate-proposal", json=_payload())
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["filename"] == "Travel_Proposal_Alice_Smith_2025-01-05.pdf"
    assert client.get(body["downloadUrl"]).status_code == 200


def test_missing_price_is_400_and_writes_nothing(client, settings, renderer):
    resp = client.post("/generate-proposal", json=_payload(pricing={"totalPackagePrice": 0}))
    assert resp.status_code == 400
    assert "package price" in resp.json()["error"]
    assert renderer.calls == []
    assert not settings.output_dir.exists() or list(settings.output_dir.iterdir()) == []
    assert _audit_rows(client) == []


def test_validation_order_at_http_boundary(client):
    resp = client.post(
        "/generate-proposal",
        json=_payload(customerInfo={"customerName": ""}, pricing={"totalPackagePrice": None}),
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Customer name is required"}


def test_same_customer_same_day_overwrites(client, settings):
    first = client.post("/generate-proposal", json=_payload(tripDetails={"packageTitle": "Bali Escape"}))
    second = client.post("/generate-proposal", json=_payload(tripDetails={"packageTitle": "Bali Deluxe"}))
    assert first.status_code == second.status_code == 200
    assert first.json()["filename"] == second.json()["filename"]
    assert [p.name for p in settings.output_dir.iterdir()] == [first.json()["filename"]]
    assert b"Bali Deluxe" in client.get(second.json()["downloadUrl"]).content


def test_unknown_destination_id_falls_back_to_text(client, renderer):
    resp = client.post("/generate-proposal", json=_payload(tripDetails={"destinationId": 999}))
    assert resp.status_code == 200
    html = renderer.calls[0]
    assert "Bali, Indonesia" in html
    assert "<img" not in html


def test_destination_id_enriches_html(client, renderer):
    db = client.app.state.database.session()
    try:
        dest = Destination(
            name="Ubud", country="Indonesia", slug="ubud", hero_image="https://example.com/ubud.jpg", status="published"
        )
        db.add(dest)
        db.commit()
        dest_id = dest.id
    finally:
        db.close()

    resp = client.post("/generate-proposal", json=_payload(tripDetails={"destination": None, "destinationId": dest_id}))
    assert resp.status_code == 200
    html = renderer.calls[0]
    assert "Ubud, Indonesia" in html
    assert 'src="https://example.com/ubud.jpg"' in html
    assert _audit_rows(client)[0].destination_id == dest_id


def test_render_failure_is_500_with_details(settings):
    renderer = FakePdfRenderer(error=RenderError("Failed to generate PDF: Timeout 30000ms exceeded", details="TimeoutError()"))
    with TestClient(create_app(settings, pdf_renderer=renderer)) as c:
        resp = c.post("/generate-proposal", json=_payload())
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert "Timeout" in body["error"]
        assert body["details"] == "TimeoutError()"
        assert not settings.output_dir.exists() or list(settings.output_dir.iterdir()) == []


def test_unexpected_error_is_500(settings):
    with TestClient(create_app(settings, pdf_renderer=FakePdfRenderer(error=RuntimeError("boom")))) as c:
        resp = c.post("/generate-proposal", json=_payload())
        assert resp.status_code == 500
        assert resp.json()["error"] == "boom"


def test_missing_template_is_500_before_render(tmp_path, renderer):
    settings = ProposalSettings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        output_dir=tmp_path / "generated-pdfs",
        template_dir=tmp_path / "no-templates",
    )
    with TestClient(create_app(settings, pdf_renderer=renderer)) as c:
        resp = c.post("/generate-proposal", json=_payload())
        assert resp.status_code == 500
        assert "Template file not found" in resp.json()["error"]
    assert renderer.calls == []


def test_invalid_generation_type_rejected(client):
    resp = client.post("/generate-proposal", json={**_payload(), "generationType": "bulk"})
    assert resp.status_code == 422


def test_download_unknown_file_is_404(client):
    assert client.get("/generated-pdfs/nope.pdf").status_code == 404


def test_null_customer_name_is_ordered_400(client, renderer):
    resp = client.post(
        "/generate-proposal",
        json=_payload(customerInfo={"customerName": None}, pricing={"totalPackagePrice": None}),
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Customer name is required"}
    assert renderer.calls == []


def test_null_package_title_is_ordered_400(client):
    resp = client.post("/generate-proposal", json=_payload(tripDetails={"packageTitle": None}))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Package title is required"}
