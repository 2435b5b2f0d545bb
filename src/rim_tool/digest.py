"""Digest helpers for the values and files referenced by a RIM.

String digests are rendered as lowercase hex, file digests as standard
Base64. Neither function raises: failures are logged and turned into
sentinel results (``None`` for an unsupported algorithm, ``""`` for a file
that could not be read).
"""
from __future__ import annotations

import base64
import hashlib
import logging
from enum import Enum
from pathlib import Path

ENCODING = "utf-8"
BUFFER_SIZE = 8192


class HashAlgorithm(Enum):
    SHA256 = "256"
    SHA384 = "384"
    SHA512 = "512"

    @property
    def hashlib_name(self) -> str:
        return f"sha{self.value}"

    @property
    def standard_name(self) -> str:
        return f"SHA-{self.value}"

    @property
    def hex_length(self) -> int:
        return int(self.value) // 4

    @classmethod
    def from_id(cls, alg: HashAlgorithm | str) -> HashAlgorithm:
        """Resolve ``"256"``, ``"SHA-256"``, ``"sha256"`` (any case) or a member."""
        if isinstance(alg, cls):
            return alg
        if isinstance(alg, str):
            token = alg.strip().upper().replace("-", "").replace("_", "")
            if token.startswith("SHA"):
                token = token[3:]
            for member in cls:
                if member.value == token:
                    return member
        raise ValueError(f"{alg} MessageDigest not available")


def hash_value(value: str, algorithm: HashAlgorithm | str = HashAlgorithm.SHA256) -> str | None:
    try:
        alg = HashAlgorithm.from_id(algorithm)
    except ValueError as e:
        logging.error("%s", e)
        return None
    try:
        data = value.encode(ENCODING)
    except UnicodeEncodeError as e:
        logging.error("%s", e)
        return None
    digest = hashlib.new(alg.hashlib_name, data).digest()
    return "".join(f"{b:02x}" for b in digest)


def get_256_hash(value: str) -> str | None:
    return hash_value(value, HashAlgorithm.SHA256)


def get_384_hash(value: str) -> str | None:
    return hash_value(value, HashAlgorithm.SHA384)


def get_512_hash(value: str) -> str | None:
    return hash_value(value, HashAlgorithm.SHA512)


def hash_file(path: str | Path) -> str:
    """Return the Base64 SHA-256 of the file at *path*, or ``""`` on failure.

    Always SHA-256; the content is streamed in ``BUFFER_SIZE`` chunks.
    """
    md = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            while True:
                chunk = f.read(BUFFER_SIZE)
                if not chunk:
                    break
                md.update(chunk)
    except (OSError, TypeError, ValueError) as e:
        logging.error("%s: \n%s is not valid...", e, path)
        return ""
    return base64.b64encode(md.digest()).decode("ascii")


def verify_file_hash(path: str | Path, expected_b64: str) -> bool:
    actual = hash_file(path)
    if not actual:
        return False
    return actual == expected_b64


def is_hex_digest(value: str, algorithm: HashAlgorithm | str = HashAlgorithm.SHA256) -> bool:
    try:
        alg = HashAlgorithm.from_id(algorithm)
    except ValueError:
        return False
    if not isinstance(value, str) or len(value) != alg.hex_length:
        return False
    return all(c in "0123456789abcdef" for c in value)


def verify_value_hash(value: str, expected_hex: str,
                      algorithm: HashAlgorithm | str = HashAlgorithm.SHA256) -> bool:
    """Check a hex hash attribute against *value*; malformed digests never match."""
    if not is_hex_digest(expected_hex, algorithm):
        return False
    return hash_value(value, algorithm) == expected_hex
