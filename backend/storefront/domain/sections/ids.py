import logging
import random
import uuid

logger = logging.getLogger(__name__)

UUID_TEMPLATE = "xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx"


def _random_nibble(placeholder: str) -> str:
    r = random.getrandbits(4)
    if placeholder == "y":
        # variant bits 10xx
        r = (r & 0x3) | 0x8
    return format(r, "x")


def manual_uuid4() -> str:
    """
    Build a v4-layout identifier one random nibble at a time.

    Only used when the OS cannot provide cryptographic randomness.
    """
    return "".join(
        _random_nibble(c) if c in "xy" else c
        for c in UUID_TEMPLATE
    )


def generate_section_id() -> str:
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        logger.warning("No OS random source available, using manual id generator")
        return manual_uuid4()
