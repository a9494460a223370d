from .section import normalize_section


def normalize_template(template, registry=None, include_sections=True):
    data = {
        "id": template.id,
        "name": template.name,
        "section_count": len(template.sections),
    }

    if include_sections:
        data["sections"] = [
            normalize_section(s, registry=registry)
            for s in sorted(template.sections, key=lambda s: s.position)
        ]

    return data
