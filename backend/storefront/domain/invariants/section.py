from ..exceptions import InvariantViolation


def assert_section_positions(sections):
    positions = [section.position for section in sections]
    expected = list(range(len(positions)))

    if positions != expected:
        raise InvariantViolation(
            f"Section positions must match list order starting from 0: {positions}"
        )


def assert_unique_ids(sections):
    seen = set()
    for section in sections:
        if section.id in seen:
            raise InvariantViolation(f"Duplicate section id: {section.id}")
        seen.add(section.id)
