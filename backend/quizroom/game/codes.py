from __future__ import annotations

import secrets
from typing import Any, Iterable

# No 0/O or 1/I so codes can be read off a TV screen.
ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 4
ROOM_CODE_FALLBACK_LENGTH = 6
ROOM_CODE_ATTEMPTS = 25


def normalize_room_code(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip().upper()


def random_code(length: int) -> str:
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def generate_room_code(existing_codes: Iterable[str]) -> str:
    """Pick a short code that does not collide with ``existing_codes``.

    Tries ``ROOM_CODE_ATTEMPTS`` codes of ``ROOM_CODE_LENGTH`` characters and
    then falls back to a single longer code without a uniqueness check.
    """
    taken = {normalize_room_code(c) for c in existing_codes}

    for _ in range(ROOM_CODE_ATTEMPTS):
        code = random_code(ROOM_CODE_LENGTH)
        if code not in taken:
            return code

    return random_code(ROOM_CODE_FALLBACK_LENGTH)
