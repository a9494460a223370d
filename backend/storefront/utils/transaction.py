from contextlib import contextmanager
from flask import current_app
from storefront.extensions import db

@contextmanager
def transactional(operation: str = "write"):
    """
    Runs the block as one unit of work on the Flask-SQLAlchemy session.

    Yields the session, commits when the block finishes, and rolls back
    before re-raising if anything in it (or the commit) fails.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        current_app.logger.warning("Rolled back %s: %s", operation, exc)
        raise
