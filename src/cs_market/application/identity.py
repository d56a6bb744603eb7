"""Anonymous per-profile user id, stored under its own key."""

import logging

from src.cs_common.id_generator import generate_user_id
from src.cs_common.kv_store import KeyValueStore

logger = logging.getLogger("cs.identity")


def get_or_create_user_id(kv: KeyValueStore, key: str) -> str:
    """Return the stored user id, creating and persisting one if absent.

    Storage failures yield a fresh id that only lasts this session.
    """
    try:
        existing = kv.get(key)
    except Exception:
        logger.warning("User id read failed for key %s", key, exc_info=True)
        existing = None
    if existing:
        return existing

    user_id = generate_user_id()
    try:
        kv.set(key, user_id)
    except Exception:
        logger.warning("User id %s not persisted; valid for this session only", user_id, exc_info=True)
    else:
        logger.info("Created anonymous user id %s", user_id)
    return user_id
