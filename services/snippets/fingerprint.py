# services/snippets/fingerprint.py
import hashlib

HASH_ALGORITHM = "sha256"
TEXT_ENCODING = "utf-8"


def fingerprint(text: str) -> str:
    """Lowercase hex SHA-256 of ``text`` encoded as UTF-8."""
    return hashlib.new(HASH_ALGORITHM, text.encode(TEXT_ENCODING)).hexdigest()
