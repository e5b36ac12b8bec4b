"""Invite codes for joining training sessions: 8 characters, no look-alike characters."""

from __future__ import annotations

import re
import secrets

# No 0/O, 1/I/l
INVITE_CODE_ALPHABET = "23456789ABCDEFGHJKLMNPQRSTUVWXYZ"
INVITE_CODE_LENGTH = 8

_INVITE_CODE_RE = re.compile(rf"[{INVITE_CODE_ALPHABET}]{{{INVITE_CODE_LENGTH}}}")


def generate_invite_code() -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def is_valid_invite_code(code: str) -> bool:
    return bool(_INVITE_CODE_RE.fullmatch(code))
