"""Invite code generation and validation."""

from buddylifts.invite_code import INVITE_CODE_ALPHABET, generate_invite_code, is_valid_invite_code


def test_generated_codes_are_valid_and_unique() -> None:
    codes = {generate_invite_code() for _ in range(100)}
    assert len(codes) == 100
    for code in codes:
        assert len(code) == 8
        assert set(code) <= set(INVITE_CODE_ALPHABET)
        assert is_valid_invite_code(code)


def test_alphabet_excludes_ambiguous_characters() -> None:
    for ch in "01OIl":
        assert ch not in INVITE_CODE_ALPHABET


def test_is_valid_invite_code_rejects_bad_format() -> None:
    assert is_valid_invite_code("ABCD2345")
    assert not is_valid_invite_code("abcd2345")  # lowercase
    assert not is_valid_invite_code("ABCD234")  # too short
    assert not is_valid_invite_code("ABCD23456")  # too long
    assert not is_valid_invite_code("ABCD2340")  # ambiguous 0
    assert not is_valid_invite_code("")
