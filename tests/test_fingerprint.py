# tests/test_fingerprint.py
import hashlib

from services.snippets.fingerprint import fingerprint


def test_known_digest():
    assert fingerprint("") == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_same_text_same_digest():
    text = "const a: number = 1;\n"
    assert fingerprint(text) == fingerprint(text)


def test_single_character_change_changes_digest():
    assert fingerprint("const a = 1;\n") != fingerprint("const a = 2;\n")


def test_lowercase_hex_of_utf8_bytes():
    text = "const greeting = \"héllo ✓\";\n"
    digest = fingerprint(text)
    assert digest == hashlib.sha256(text.encode("utf-8")).hexdigest()
    assert len(digest) == 64
    assert digest == digest.lower()
