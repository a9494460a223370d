from .section import assert_section_positions, assert_unique_ids
from .settings import assert_settings


def assert_page(sections, registry=None):
    """
    Checks a section list before it is persisted.

    Settings are only checked against their schema when a registry is given.
    """
    assert_section_positions(sections)
    assert_unique_ids(sections)

    if registry is not None:
        assert_settings(sections, registry)
