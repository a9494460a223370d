"""HTTP tests for the public storefront read endpoints and service metadata."""

from storefront.domain.exceptions import PersistenceFailure
from storefront.domain.sections.types import PageType, Section
from storefront.persistence.sql_gateway import SqlSectionGateway

from conftest import MERCHANT_ID

API = "/api/v1"


def save_page(page_type, sections, validate_settings=True):
    gateway = SqlSectionGateway(validate_settings=validate_settings)
    gateway.replace_all_by_page(MERCHANT_ID, page_type, sections)


class TestStorefrontPages:
    def test_defaults_for_new_merchant(self, client):
        response = client.get(f"{API}/storefront/{MERCHANT_ID}/pages/home")

        data = response.get_json()
        assert response.status_code == 200
        assert data["source"] == "default"
        assert data["degraded"] is False
        assert [s["type"] for s in data["sections"]] == ["hero", "featured_products", "newsletter", "trust_badges"]

    def test_saved_page_hides_invisible_sections(self, app, client):
        save_page(PageType.HOME, [
            Section(id="a", type="hero", position=0),
            Section(id="b", type="newsletter", position=1, visible=False),
            Section(id="c", type="footer", position=2),
        ])

        data = client.get(f"{API}/storefront/{MERCHANT_ID}/pages/home").get_json()

        assert data["source"] == "page"
        assert [s["id"] for s in data["sections"]] == ["a", "c"]
        assert data["sections"][1]["location"] == "footer"

    def test_unknown_types_are_skipped(self, app, client):
        save_page(PageType.CATALOG, [
            Section(id="a", type="marquee", position=0),
            Section(id="b", type="catalog_header", position=1),
        ], validate_settings=False)

        data = client.get(f"{API}/storefront/{MERCHANT_ID}/pages/catalog").get_json()

        assert [s["id"] for s in data["sections"]] == ["b"]

    def test_invalid_page_type(self, client):
        response = client.get(f"{API}/storefront/{MERCHANT_ID}/pages/blog")
        assert response.status_code == 422

    def test_storage_outage_degrades_to_defaults(self, client, monkeypatch):
        def unavailable(self, merchant_id, page_type):
            raise PersistenceFailure("Could not load home sections")

        monkeypatch.setattr(SqlSectionGateway, "fetch_by_page", unavailable)

        data = client.get(f"{API}/storefront/{MERCHANT_ID}/pages/home").get_json()

        assert data["source"] == "default"
        assert data["degraded"] is True


class TestProductSections:
    def test_template_takes_priority(self, app, client):
        record = SqlSectionGateway().create_template(
            MERCHANT_ID, "Summer", [Section(id="t1", type="product_tabs", position=0)]
        )
        save_page(PageType.PRODUCT, [Section(id="p1", type="product_trust", position=0)])

        data = client.get(
            f"{API}/storefront/{MERCHANT_ID}/products/sections", query_string={"template_id": record.id}
        ).get_json()

        assert data["source"] == "template"
        assert data["template_name"] == "Summer"
        assert [s["id"] for s in data["sections"]] == ["t1"]

    def test_missing_template_falls_back_to_page(self, app, client):
        save_page(PageType.PRODUCT, [Section(id="p1", type="product_trust", position=0)])

        data = client.get(
            f"{API}/storefront/{MERCHANT_ID}/products/sections", query_string={"template_id": "gone"}
        ).get_json()

        assert data["source"] == "page"
        assert [s["id"] for s in data["sections"]] == ["p1"]

    def test_defaults(self, client):
        data = client.get(f"{API}/storefront/{MERCHANT_ID}/products/sections").get_json()

        assert data["source"] == "default"
        assert [s["type"] for s in data["sections"]] == ["product_trust", "related_products"]


class TestMetadata:
    def test_health(self, client):
        data = client.get(f"{API}/health").get_json()

        assert data["status"] == "ok"
        assert data["section_types"] == 12

    def test_page_types_are_public(self, client):
        data = client.get(f"{API}/page-types").get_json()
        assert [p["type"] for p in data] == ["home", "catalog", "product"]

    def test_section_types_require_a_token(self, client):
        assert client.get(f"{API}/section-types").status_code == 401

    def test_section_types_filtered_by_page(self, client, viewer_headers):
        response = client.get(f"{API}/section-types", query_string={"page_type": "home"}, headers=viewer_headers)

        types = [d["type"] for d in response.get_json()]
        assert response.status_code == 200
        assert "hero" in types
        assert "catalog_header" not in types
        assert "product_tabs" not in types

    def test_section_type_schema_shape(self, client, auth_headers):
        data = client.get(f"{API}/section-types", headers=auth_headers).get_json()
        hero = next(d for d in data if d["type"] == "hero")

        assert hero["default_settings"]["overlay_opacity"] == 60
        opacity = next(f for f in hero["settings_schema"] if f["key"] == "overlay_opacity")
        assert opacity == {"key": "overlay_opacity", "type": "range", "label": "Image Darkness", "min": 0, "max": 100}

    def test_openapi_document_is_served(self, client):
        response = client.get("/openapi/storefront.yaml")

        assert response.status_code == 200
        assert b"openapi:" in response.data
        response.close()
