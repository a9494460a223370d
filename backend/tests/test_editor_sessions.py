"""Tests for editor session locking and the expiry of idle sessions."""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from storefront.application.storefront.editor_sessions import EditorSessionManager
from storefront.domain.exceptions import SessionBusy, SessionNotFound
from storefront.domain.sections.types import PageType

MERCHANT = "m-1"
OTHER = "m-2"


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def open_home(gateway, registry):
    def _open(manager, merchant_id=MERCHANT):
        return manager.open_page(
            gateway=gateway,
            registry=registry,
            merchant_id=merchant_id,
            page_type=PageType.HOME,
        )

    return _open


class TestExclusive:
    def test_second_holder_is_refused(self, open_home):
        session = open_home(EditorSessionManager())

        with session.exclusive():
            assert session.busy is True
            with pytest.raises(SessionBusy):
                with session.exclusive():
                    pass

        assert session.busy is False

    def test_released_when_the_change_fails(self, open_home):
        session = open_home(EditorSessionManager())

        with pytest.raises(RuntimeError):
            with session.exclusive():
                raise RuntimeError("boom")

        with session.exclusive():
            assert session.busy is True

    def test_edit_is_refused_while_save_is_in_flight(self, open_home, gateway):
        session = open_home(EditorSessionManager())
        first = session.store.sections[0].id
        started, release = threading.Event(), threading.Event()

        def slow_persist(items):
            started.set()
            assert release.wait(5)
            gateway.pages[(MERCHANT, PageType.HOME)] = items

        session.store._persist = slow_persist
        session.store.update_setting(first, "title", "A")

        def save():
            with session.exclusive():
                session.store.save()

        worker = threading.Thread(target=save)
        worker.start()
        assert started.wait(5)

        with pytest.raises(SessionBusy):
            with session.exclusive():
                session.store.update_setting(first, "title", "B")

        release.set()
        worker.join(5)

        saved = gateway.pages[(MERCHANT, PageType.HOME)]
        assert saved[0].settings["title"] == "A"
        assert session.store.get(first).settings["title"] == "A"
        assert session.store.is_dirty is False


class TestIdleExpiry:
    def test_expired_session_is_not_found(self, clock, open_home):
        manager = EditorSessionManager(idle_timeout=timedelta(minutes=5), clock=clock)
        session = open_home(manager)

        clock.advance(minutes=6)

        with pytest.raises(SessionNotFound):
            manager.get(session.id, MERCHANT)
        assert len(manager) == 0

    def test_use_keeps_a_session_alive(self, clock, open_home):
        manager = EditorSessionManager(idle_timeout=timedelta(minutes=5), clock=clock)
        session = open_home(manager)

        for _ in range(3):
            clock.advance(minutes=4)
            assert manager.get(session.id, MERCHANT) is session

        assert session.last_used_at == clock.now

    def test_opening_sweeps_other_idle_sessions(self, clock, open_home):
        manager = EditorSessionManager(idle_timeout=timedelta(minutes=5), clock=clock)
        open_home(manager, OTHER)
        clock.advance(minutes=10)

        open_home(manager)

        assert len(manager) == 1

    def test_busy_session_outlives_the_timeout(self, clock, open_home):
        manager = EditorSessionManager(idle_timeout=timedelta(minutes=5), clock=clock)
        held = open_home(manager)
        other = open_home(manager)

        with held.exclusive():
            clock.advance(minutes=10)
            with pytest.raises(SessionNotFound):
                manager.get(other.id, MERCHANT)
            assert manager.get(held.id, MERCHANT) is held

    def test_no_timeout_keeps_sessions(self, clock, open_home):
        manager = EditorSessionManager(clock=clock)
        session = open_home(manager)

        clock.advance(days=30)

        assert manager.get(session.id, MERCHANT) is session


class TestPerMerchantLimit:
    def test_least_recently_used_session_is_dropped(self, clock, open_home):
        manager = EditorSessionManager(max_per_merchant=2, clock=clock)
        oldest = open_home(manager)
        clock.advance(minutes=1)
        recent = open_home(manager)
        clock.advance(minutes=1)
        manager.get(oldest.id, MERCHANT)
        clock.advance(minutes=1)

        newest = open_home(manager)

        assert manager.get(oldest.id, MERCHANT) is oldest
        assert manager.get(newest.id, MERCHANT) is newest
        with pytest.raises(SessionNotFound):
            manager.get(recent.id, MERCHANT)

    def test_other_merchants_are_untouched(self, clock, open_home):
        manager = EditorSessionManager(max_per_merchant=1, clock=clock)
        theirs = open_home(manager, OTHER)

        open_home(manager)
        open_home(manager)

        assert len(manager) == 2
        assert manager.get(theirs.id, OTHER) is theirs

    def test_held_sessions_are_kept_over_the_limit(self, clock, open_home):
        manager = EditorSessionManager(max_per_merchant=1, clock=clock)
        held = open_home(manager)

        with held.exclusive():
            newest = open_home(manager)

        assert len(manager) == 2
        assert manager.get(held.id, MERCHANT) is held
        assert manager.get(newest.id, MERCHANT) is newest


class TestFromConfig:
    def test_reads_limits(self):
        manager = EditorSessionManager.from_config({
            "EDITOR_SESSION_IDLE_MINUTES": 30,
            "EDITOR_MAX_SESSIONS_PER_MERCHANT": 5,
        })

        assert manager.idle_timeout == timedelta(minutes=30)
        assert manager.max_per_merchant == 5

    def test_zero_disables_limits(self):
        manager = EditorSessionManager.from_config({
            "EDITOR_SESSION_IDLE_MINUTES": 0,
            "EDITOR_MAX_SESSIONS_PER_MERCHANT": 0,
        })

        assert manager.idle_timeout is None
        assert manager.max_per_merchant is None

    def test_app_is_configured(self, app):
        manager = app.extensions["editor_sessions"]

        assert manager.idle_timeout == timedelta(minutes=app.config["EDITOR_SESSION_IDLE_MINUTES"])
        assert manager.max_per_merchant == app.config["EDITOR_MAX_SESSIONS_PER_MERCHANT"]
