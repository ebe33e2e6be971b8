"""the beautiful world start from here."""

from __future__ import annotations

import hashlib
import hmac


def bb_verify(secret: str, body: bytes, signature_header: str | None) -> bool:
    """
    Verify Bitbucket webhook HMAC signature (X-Hub-Signature).

    Returns
    -------
    bool
        True if valid, False otherwise.
    """
    if not signature_header or not signature_header.startswith("sha256="):
        return False
    sig = signature_header.split("=", 1)[1]
    mac = hmac.new(secret.encode(), msg=body, digestmod=hashlib.sha256).hexdigest()
    return hmac.compare_digest(mac, sig)


def truncate(text: str, limit: int, keep: int, suffix: str = "...") -> str:
    """Cut ``text`` to ``keep`` chars plus ``suffix`` once it exceeds ``limit``."""
    if len(text) > limit:
        return text[:keep] + suffix
    return text
