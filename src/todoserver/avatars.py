from __future__ import annotations

import hashlib
import logging

logger = logging.getLogger("todoserver.avatars")

AVATAR_URL_TEMPLATE = "https://gravatar.com/avatar/{digest}?d=identicon"
PLACEHOLDER_AVATAR_URL = "https://gravatar.com/avatar/?d=mp"


def email_digest(email: str) -> str:
    # FIPS-restricted builds raise ValueError for md5 unless flagged as non-security use.
    return hashlib.md5(email.lower().encode("utf-8"), usedforsecurity=False).hexdigest()


def avatar_url_for(email: str) -> str:
    try:
        digest = email_digest(email)
    except ValueError:
        logger.warning("md5 unavailable; using placeholder avatar", exc_info=True)
        return PLACEHOLDER_AVATAR_URL
    return AVATAR_URL_TEMPLATE.format(digest=digest)
