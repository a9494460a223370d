def rename_template(
    *,
    gateway,
    sessions,
    merchant_id: str,
    template_id: str,
    name: str,
) -> str:
    """
    Rename a template and refresh the name on its open editor sessions.

    The rename is written straight through; it is not part of the
    section working copy and is unaffected by save/reset.
    """
    gateway.rename_template(merchant_id, template_id, name)
    name = name.strip()

    for session in sessions.for_template(merchant_id, template_id):
        session.template_name = name

    return name
