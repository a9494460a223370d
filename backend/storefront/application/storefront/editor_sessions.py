import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple

from storefront.domain.exceptions import SessionBusy, SessionNotFound, TemplateNotFound
from storefront.domain.sections.factory import SectionFactory
from storefront.domain.sections.gateway import SectionGateway
from storefront.domain.sections.resolver import resolve_page_sections
from storefront.domain.sections.store import SectionCollectionStore
from storefront.domain.sections.types import PageType

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class EditorSession:
    """One operator editing one page or one template."""

    id: str
    merchant_id: str
    store: SectionCollectionStore
    page_type: Optional[PageType] = None
    template_id: Optional[str] = None
    template_name: Optional[str] = None
    source: str = "page"
    load_failures: List[Tuple[str, str]] = field(default_factory=list)
    opened_at: datetime = field(default_factory=_utc_now)
    last_used_at: datetime = field(default_factory=_utc_now)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    @property
    def target(self) -> str:
        return "template" if self.template_id else "page"

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def exclusive(self):
        """
        Holds the session for one mutation or save.

        Never waits: a second request arriving while the session is held
        gets SessionBusy instead of interleaving with the first.
        """
        if not self._lock.acquire(blocking=False):
            raise SessionBusy(f"Session {self.id} is busy; retry when the current change finishes")
        try:
            yield self
        finally:
            self._lock.release()


class EditorSessionManager:
    """
    Holds open editor sessions in process memory.

    The manager lock only protects the session table. Sessions idle for
    longer than `idle_timeout` are dropped, and opening a session beyond
    `max_per_merchant` drops that merchant's least recently used one.
    Sessions in the middle of a change are never dropped.
    """

    def __init__(
        self,
        idle_timeout: Optional[timedelta] = None,
        max_per_merchant: Optional[int] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._sessions: Dict[str, EditorSession] = {}
        self._lock = threading.Lock()
        self.idle_timeout = idle_timeout
        self.max_per_merchant = max_per_merchant
        self._clock = clock

    @classmethod
    def from_config(cls, config) -> "EditorSessionManager":
        idle_minutes = config.get("EDITOR_SESSION_IDLE_MINUTES")
        return cls(
            idle_timeout=timedelta(minutes=idle_minutes) if idle_minutes else None,
            max_per_merchant=config.get("EDITOR_MAX_SESSIONS_PER_MERCHANT") or None,
        )

    # ------------------------
    # Table maintenance
    # ------------------------
    def _drop(self, session: EditorSession, reason: str) -> None:
        # caller holds self._lock
        self._sessions.pop(session.id, None)
        logger.info(
            "Dropped editor session %s of merchant %s (%s, unsaved changes: %s)",
            session.id,
            session.merchant_id,
            reason,
            session.store.is_dirty,
        )

    def _evict_expired(self) -> None:
        if self.idle_timeout is None:
            return
        cutoff = self._clock() - self.idle_timeout
        for session in list(self._sessions.values()):
            if session.last_used_at < cutoff and not session.busy:
                self._drop(session, "idle")

    def _enforce_cap(self, merchant_id: str) -> None:
        if not self.max_per_merchant:
            return
        idle = sorted(
            (
                s for s in self._sessions.values()
                if s.merchant_id == merchant_id and not s.busy
            ),
            key=lambda s: s.last_used_at,
        )
        owned = sum(1 for s in self._sessions.values() if s.merchant_id == merchant_id)
        while idle and owned >= self.max_per_merchant:
            self._drop(idle.pop(0), "limit")
            owned -= 1

    def _register(self, session: EditorSession) -> EditorSession:
        now = self._clock()
        session.opened_at = now
        session.last_used_at = now
        with self._lock:
            self._evict_expired()
            self._enforce_cap(session.merchant_id)
            self._sessions[session.id] = session
        return session

    # ------------------------
    # Lookup
    # ------------------------
    def get(self, session_id: str, merchant_id: str) -> EditorSession:
        with self._lock:
            self._evict_expired()
            session = self._sessions.get(session_id)
            # Another merchant's session is reported as missing
            if session is None or session.merchant_id != merchant_id:
                raise SessionNotFound(session_id)
            session.last_used_at = self._clock()
        return session

    def close(self, session_id: str, merchant_id: str) -> EditorSession:
        session = self.get(session_id, merchant_id)
        with self._lock:
            self._sessions.pop(session_id, None)
        return session

    def for_template(self, merchant_id: str, template_id: str) -> List[EditorSession]:
        with self._lock:
            return [
                session
                for session in self._sessions.values()
                if session.merchant_id == merchant_id and session.template_id == template_id
            ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    # ------------------------
    # Opening sessions
    # ------------------------
    def open_page(
        self,
        *,
        gateway: SectionGateway,
        registry,
        merchant_id: str,
        page_type: PageType,
    ) -> EditorSession:
        """
        Seeds a session from the merchant's saved page.

        Falls back to the page type's default sections when nothing is saved
        or storage is unavailable; the failure is kept on the session.
        """
        factory = SectionFactory(registry)
        resolution = resolve_page_sections(gateway, factory, merchant_id, page_type)

        def persist(sections):
            gateway.replace_all_by_page(merchant_id, page_type, sections)

        store = SectionCollectionStore(resolution.sections, persist=persist, factory=factory)
        return self._register(
            EditorSession(
                id=str(uuid.uuid4()),
                merchant_id=merchant_id,
                store=store,
                page_type=page_type,
                source=resolution.source,
                load_failures=resolution.failures,
            )
        )

    def open_template(
        self,
        *,
        gateway: SectionGateway,
        registry,
        merchant_id: str,
        template_id: str,
    ) -> EditorSession:
        template = gateway.fetch_template(merchant_id, template_id)
        if template is None:
            raise TemplateNotFound(template_id)

        def persist(sections):
            gateway.replace_template_sections(merchant_id, template_id, sections)

        store = SectionCollectionStore(
            template.sections,
            persist=persist,
            factory=SectionFactory(registry),
        )
        return self._register(
            EditorSession(
                id=str(uuid.uuid4()),
                merchant_id=merchant_id,
                store=store,
                page_type=PageType.PRODUCT,
                template_id=template.id,
                template_name=template.name,
                source="template",
            )
        )
