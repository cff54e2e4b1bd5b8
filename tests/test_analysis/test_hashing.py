"""Tests for the fallback seed hash."""

from __future__ import annotations

from boardread.analysis.hashing import string_hash31


def test_empty():
    assert string_hash31("") == 0


def test_small_values():
    assert string_hash31("a") == 97
    assert string_hash31("ab") == 97 * 31 + 98


def test_matches_known_java_string_hash():
    # Same recurrence as java.lang.String.hashCode
    assert string_hash31("hello") == 99162322


def test_signed_wraparound():
    # Hashes to exactly -2**31 under 32-bit arithmetic
    assert string_hash31("polygenelubricants") == 2**31


def test_utf16_code_units():
    # U+1F600 is hashed as its surrogate pair 0xD83D 0xDE00
    assert string_hash31("\U0001F600") == 0xD83D * 31 + 0xDE00


def test_deterministic():
    assert string_hash31("ad.jpgSultan Qaboos") == string_hash31("ad.jpgSultan Qaboos")
    assert string_hash31("ad.jpgSultan Qaboos") != string_hash31("ad.pngSultan Qaboos")
