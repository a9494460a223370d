from .section import normalize_section


def normalize_error(error):
    if error is None:
        return None
    return {
        "type": type(error).__name__,
        "message": str(error),
        "errors": getattr(error, "errors", []),
    }


def normalize_session(session, registry=None):
    store = session.store

    return {
        "id": session.id,
        "target": session.target,
        "page_type": session.page_type.value if session.page_type else None,
        "template_id": session.template_id,
        "template_name": session.template_name,
        "source": session.source,
        "state": store.state.value,
        "dirty": store.is_dirty,
        "error": normalize_error(store.error),
        "load_failures": [
            {"tier": tier, "message": message}
            for tier, message in session.load_failures
        ],
        "sections": [
            normalize_section(s, registry=registry)
            for s in store.sections
        ],
    }
