"""Shared fixtures for the storefront composer test suite."""

from __future__ import annotations

import copy

import pytest
from flask_jwt_extended import create_access_token

from storefront import create_app
from storefront.domain.exceptions import TemplateNotFound
from storefront.domain.sections.catalogue import build_default_registry
from storefront.domain.sections.factory import SectionFactory
from storefront.domain.sections.gateway import SectionGateway, TemplateRecord
from storefront.domain.sections.types import PageType, Section
from storefront.extensions import db

MERCHANT_ID = "merchant-1"
OTHER_MERCHANT_ID = "merchant-2"


# ---------------------------------------------------------------------------
# In-memory gateway
# ---------------------------------------------------------------------------

class FakeGateway(SectionGateway):
    """Dictionary-backed gateway that records calls and can be told to fail."""

    def __init__(self):
        self.pages: dict = {}
        self.templates: dict = {}
        self.calls: list[str] = []
        self.failures: dict[str, Exception] = {}

    def _enter(self, name):
        self.calls.append(name)
        if name in self.failures:
            raise self.failures[name]

    def writes(self):
        return [c for c in self.calls if not c.startswith("fetch")]

    def fetch_by_page(self, merchant_id, page_type):
        self._enter("fetch_by_page")
        return copy.deepcopy(self.pages.get((merchant_id, PageType(page_type)), []))

    def fetch_template(self, merchant_id, template_id):
        self._enter("fetch_template")
        template = self.templates.get((merchant_id, template_id))
        return copy.deepcopy(template)

    def replace_all_by_page(self, merchant_id, page_type, sections):
        self._enter("replace_all_by_page")
        self.pages[(merchant_id, PageType(page_type))] = copy.deepcopy(list(sections))

    def replace_template_sections(self, merchant_id, template_id, sections):
        self._enter("replace_template_sections")
        template = self.templates.get((merchant_id, template_id))
        if template is None:
            raise TemplateNotFound(template_id)
        template.sections = copy.deepcopy(list(sections))

    def rename_template(self, merchant_id, template_id, name):
        self._enter("rename_template")
        template = self.templates.get((merchant_id, template_id))
        if template is None:
            raise TemplateNotFound(template_id)
        template.name = name

    def add_template(self, merchant_id, template_id, name, sections=()):
        self.templates[(merchant_id, template_id)] = TemplateRecord(
            id=template_id, name=name, sections=copy.deepcopy(list(sections))
        )


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def factory(registry):
    return SectionFactory(registry)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def make_section():
    """Build a plain Section; positions are fixed up by whoever loads them."""

    def _make(section_id, section_type="rich_text", position=0, **settings):
        return Section(
            id=section_id,
            type=section_type,
            position=position,
            visible=True,
            settings=dict(settings),
        )

    return _make


# ---------------------------------------------------------------------------
# Flask application
# ---------------------------------------------------------------------------

@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _headers(app, merchant_id, role="admin"):
    with app.app_context():
        token = create_access_token(
            identity="user-1",
            additional_claims={"merchant_id": merchant_id, "role": role},
        )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(app):
    return _headers(app, MERCHANT_ID)


@pytest.fixture
def other_merchant_headers(app):
    return _headers(app, OTHER_MERCHANT_ID)


@pytest.fixture
def viewer_headers(app):
    return _headers(app, MERCHANT_ID, role="viewer")
