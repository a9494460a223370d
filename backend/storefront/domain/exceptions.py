from typing import Iterable, List, Optional


class StorefrontError(Exception):
    """Base class for every error raised by the composition engine."""


class InvariantViolation(StorefrontError):
    pass


class ValidationFailure(StorefrontError, ValueError):
    """
    Caller supplied data the engine refuses to accept.

    `errors` holds one message per offending field so the editor UI
    can point at the exact setting.
    """

    def __init__(self, message: str, errors: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.errors: List[str] = list(errors or [])


class UnknownSectionType(ValidationFailure):
    def __init__(self, section_type):
        super().__init__(f"Unknown section type: {section_type}")
        self.section_type = section_type


class NotFound(StorefrontError):
    pass


class SectionNotFound(NotFound):
    def __init__(self, section_id: str):
        super().__init__(f"Section not found: {section_id}")
        self.section_id = section_id


class TemplateNotFound(NotFound):
    def __init__(self, template_id: str):
        super().__init__(f"Template not found: {template_id}")
        self.template_id = template_id


class SessionNotFound(NotFound):
    def __init__(self, session_id: str):
        super().__init__(f"Editor session not found: {session_id}")
        self.session_id = session_id


class PersistenceFailure(StorefrontError):
    pass


class SessionBusy(StorefrontError):
    """Raised when a mutation arrives while the session is held by another change."""
