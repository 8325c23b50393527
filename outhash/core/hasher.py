"""Content hashing for output filenames.

The digest is computed over the raw asset bytes followed by the optional
salt, encoded per the host's digest encoding and truncated to the digest
length. The same bytes under the same ``HashConfig`` always produce the same
result, which is what lets the validator agree with the renamer.
"""

from __future__ import annotations

import base64
import hashlib
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from outhash.models.config import HashConfig


class ConfigurationError(ValueError):
    """Raised when the digest algorithm or encoding is not supported."""


class HashResult(BaseModel):
    """Full and truncated digest of one piece of content."""

    model_config = ConfigDict(frozen=True)

    full_digest: str
    short_digest: str


def _base64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


# digest encoding name -> raw digest bytes -> text
DIGEST_ENCODERS: dict[str, Callable[[bytes], str]] = {
    "hex": bytes.hex,
    "base64": lambda raw: base64.b64encode(raw).decode("ascii"),
    "base64url": _base64url,
    "latin1": lambda raw: raw.decode("latin-1"),
}


class ContentHasher:
    """Computes ``HashResult`` values under a fixed ``HashConfig``.

    The configuration is checked on construction so an unsupported
    algorithm fails the run before any asset has been renamed.

    Parameters
    ----------
    config:
        The run's digest parameters.
    """

    def __init__(self, config: HashConfig) -> None:
        self.config = config
        self._encode = self._resolve_encoder(config.digest_encoding)
        self._check_algorithm(config.algorithm)

    @staticmethod
    def _resolve_encoder(encoding: str) -> Callable[[bytes], str]:
        try:
            return DIGEST_ENCODERS[encoding]
        except KeyError:
            raise ConfigurationError(
                f"Unsupported digest encoding {encoding!r}. "
                f"Supported: {sorted(DIGEST_ENCODERS)}"
            ) from None

    @staticmethod
    def _check_algorithm(algorithm: str) -> None:
        try:
            probe = hashlib.new(algorithm)
        except (ValueError, TypeError) as exc:
            raise ConfigurationError(
                f"Unsupported hash function {algorithm!r}: {exc}"
            ) from exc
        # shake_* digests need an explicit length and have no natural size
        if probe.digest_size == 0:
            raise ConfigurationError(
                f"Hash function {algorithm!r} has a variable-length digest"
            )

    def hash(self, data: bytes | str) -> HashResult:
        """Digest *data* (str is UTF-8 encoded) and truncate to the configured length."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        hash_obj = hashlib.new(self.config.algorithm)
        hash_obj.update(data)
        if self.config.salt:
            hash_obj.update(self.config.salt)
        full_digest = self._encode(hash_obj.digest())
        return HashResult(
            full_digest=full_digest,
            short_digest=full_digest[: self.config.digest_length],
        )

    def short_digest(self, data: bytes | str) -> str:
        return self.hash(data).short_digest

    def __repr__(self) -> str:
        return (
            f"ContentHasher(algorithm={self.config.algorithm!r}, "
            f"encoding={self.config.digest_encoding!r}, "
            f"length={self.config.digest_length})"
        )
