# app/db/seed_indexes.py
"""
Idempotent index seeding for EcoTrack.

- Works on the database handle passed in (no global client here).
- Matching by KEYS: if an index with same keys exists, keep it when options match.
- If options differ (unique / partialFilterExpression), drop & recreate.
- user_challenges: unique (user_id, challenge_id) pair, so a duplicate join fails at insert.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.operations import IndexModel

from app.db.mongodb import CHALLENGES, EVENTS, TIPS, USER_CHALLENGES, USERS

Direction = Union[int, str]
KeySpec = List[Tuple[str, Direction]]


def _normalize_key_from_mongo(key_doc: Dict[str, Any]) -> KeySpec:
    """Mongo returns an ordered mapping; convert to list of (field, direction)."""
    norm: KeySpec = []
    for k, v in key_doc.items():
        if isinstance(v, (int, float)):
            norm.append((k, int(v)))
        else:
            norm.append((k, str(v)))
    return norm


async def _find_existing_by_keys(coll, keys: KeySpec) -> Optional[Dict[str, Any]]:
    async for ix in coll.list_indexes():
        if "key" in ix and _normalize_key_from_mongo(ix["key"]) == keys:
            return ix
    return None


def _same_options(
    existing: Dict[str, Any], *, unique: Optional[bool], partial: Optional[Dict[str, Any]]
) -> bool:
    if bool(unique) != bool(existing.get("unique", False)):
        return False
    return (partial or None) == (existing.get("partialFilterExpression") or None)


async def ensure_index(
    db: AsyncIOMotorDatabase,
    coll_name: str,
    keys: KeySpec,
    *,
    name: Optional[str] = None,
    unique: Optional[bool] = None,
    partial: Optional[Dict[str, Any]] = None,
) -> None:
    coll = db[coll_name]
    existing = await _find_existing_by_keys(coll, keys)
    if existing and _same_options(existing, unique=unique, partial=partial):
        return
    if existing:
        await coll.drop_index(existing["name"])
    opts: Dict[str, Any] = {}
    if name:
        opts["name"] = name
    if unique is not None:
        opts["unique"] = unique
    if partial:
        opts["partialFilterExpression"] = partial
    await coll.create_indexes([IndexModel(keys, **opts)])


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    # ---------- users ----------
    await ensure_index(db, USERS, [("email", ASCENDING)], name="uniq_user_email", unique=True)

    # ---------- challenges ----------
    await ensure_index(db, CHALLENGES, [("category", ASCENDING)])
    await ensure_index(db, CHALLENGES, [("created_by", ASCENDING)])
    await ensure_index(db, CHALLENGES, [("start_date", ASCENDING), ("end_date", ASCENDING)])
    await ensure_index(db, CHALLENGES, [("created_at", DESCENDING)])

    # ---------- user_challenges ----------
    await ensure_index(
        db,
        USER_CHALLENGES,
        [("user_id", ASCENDING), ("challenge_id", ASCENDING)],
        name="uniq_user_challenge_pair",
        unique=True,
    )
    await ensure_index(db, USER_CHALLENGES, [("user_id", ASCENDING)])
    await ensure_index(db, USER_CHALLENGES, [("challenge_id", ASCENDING)])
    await ensure_index(db, USER_CHALLENGES, [("status", ASCENDING)])

    # ---------- tips / events ----------
    await ensure_index(db, TIPS, [("created_at", DESCENDING)])
    await ensure_index(db, EVENTS, [("date", ASCENDING)])
