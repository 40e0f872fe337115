# backend/tests/conftest.py
# Base MongoDB en mémoire (sous-ensemble de l'API Motor utilisé par les services) et client de test.

import copy
import os
import re
import tempfile

os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="ecotrack-logs-"))

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from app.db.mongodb import CHALLENGES, EVENTS, TIPS, USER_CHALLENGES, USERS, get_db

_MISSING = object()

UNIQUE_KEYS = {
    USER_CHALLENGES: ("user_id", "challenge_id"),
    USERS: ("email",),
}


def _get(doc, path):
    value = doc
    for part in path.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return _MISSING
    return value


def _eq(value, expected):
    if value is _MISSING:
        return expected is None
    if isinstance(value, list) and not isinstance(expected, list):
        return expected in value
    return value == expected


def _compare(value, op, arg):
    if value is _MISSING or value is None:
        return False
    try:
        if op == "$gt":
            return value > arg
        if op == "$gte":
            return value >= arg
        if op == "$lt":
            return value < arg
        return value <= arg
    except TypeError:
        return False


def _match_ops(value, cond):
    for op, arg in cond.items():
        if op == "$in":
            ok = any(_eq(value, a) for a in arg)
        elif op == "$nin":
            ok = not any(_eq(value, a) for a in arg)
        elif op == "$ne":
            ok = not _eq(value, arg)
        elif op in ("$gt", "$gte", "$lt", "$lte"):
            ok = _compare(value, op, arg)
        elif op == "$exists":
            ok = (value is not _MISSING) == bool(arg)
        elif op == "$regex":
            flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
            ok = isinstance(value, str) and re.search(arg, value, flags) is not None
        elif op == "$options":
            ok = True
        else:
            raise NotImplementedError(op)
        if not ok:
            return False
    return True


def match(doc, flt):
    for key, cond in (flt or {}).items():
        if key == "$or":
            if not any(match(doc, sub) for sub in cond):
                return False
        elif key == "$and":
            if not all(match(doc, sub) for sub in cond):
                return False
        elif isinstance(cond, dict) and cond and all(k.startswith("$") for k in cond):
            if not _match_ops(_get(doc, key), cond):
                return False
        elif not _eq(_get(doc, key), cond):
            return False
    return True


def _project(doc, projection):
    if not projection:
        return doc
    keys = {k for k, v in projection.items() if v}
    if projection.get("_id", 1):
        keys.add("_id")
    return {k: v for k, v in doc.items() if k in keys}


def _apply_update(doc, update):
    for field, value in update.get("$set", {}).items():
        doc[field] = copy.deepcopy(value)
    for field, value in update.get("$inc", {}).items():
        doc[field] = doc.get(field, 0) + value
    for field, value in update.get("$push", {}).items():
        doc.setdefault(field, []).append(copy.deepcopy(value))


def _sort_key(field):
    def key(doc):
        value = _get(doc, field)
        if value is _MISSING or value is None:
            return (0, 0)
        return (1, value)

    return key


class MockCursor:
    def __init__(self, docs):
        self.docs = docs
        self._limit = 0
        self._skip = 0

    def sort(self, key, direction=1):
        keys = key if isinstance(key, list) else [(key, direction)]
        for field, dir_ in reversed(keys):
            self.docs.sort(key=_sort_key(field), reverse=dir_ < 0)
        return self

    def skip(self, n):
        self._skip = n
        return self

    def limit(self, n):
        self._limit = n
        return self

    def _result(self):
        docs = self.docs[self._skip :]
        if self._limit:
            docs = docs[: self._limit]
        return docs

    async def to_list(self, length=None):
        docs = self._result()
        return docs if length is None else docs[:length]

    def __aiter__(self):
        self._iter = iter(self._result())
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration from None


def _accumulate(expr, doc):
    if isinstance(expr, dict) and "$toDouble" in expr:
        value = _get(doc, expr["$toDouble"][1:])
        return 0.0 if value in (_MISSING, None) else float(value)
    if isinstance(expr, str) and expr.startswith("$"):
        value = _get(doc, expr[1:])
        return 0 if value in (_MISSING, None) else value
    return expr


def _run_pipeline(docs, pipeline):
    for stage in pipeline:
        (op, spec), = stage.items()
        if op == "$match":
            docs = [d for d in docs if match(d, spec)]
        elif op == "$unwind":
            path = (spec["path"] if isinstance(spec, dict) else spec)[1:]
            unwound = []
            for d in docs:
                for item in d.get(path) or []:
                    unwound.append({**d, path: item})
            docs = unwound
        elif op == "$group":
            groups = {}
            for d in docs:
                gid = spec["_id"]
                key = _get(d, gid[1:]) if isinstance(gid, str) else gid
                row = groups.setdefault(key, {"_id": key})
                for name, acc in spec.items():
                    if name == "_id":
                        continue
                    row[name] = row.get(name, 0) + _accumulate(acc["$sum"], d)
            docs = list(groups.values())
        else:
            raise NotImplementedError(op)
    return docs


class MockCollection:
    """Collection en mémoire : `data` contient les documents stockés."""

    def __init__(self, name, unique=None):
        self.name = name
        self.unique = unique
        self.data = []

    def seed(self, *docs):
        """Insère directement des documents (avec `_id` généré si absent)."""
        for doc in docs:
            doc.setdefault("_id", ObjectId())
            self.data.append(copy.deepcopy(doc))
        return docs

    def _matching(self, flt):
        return [d for d in self.data if match(d, flt)]

    def find(self, flt=None, projection=None, **kwargs):
        return MockCursor([_project(copy.deepcopy(d), projection) for d in self._matching(flt)])

    async def find_one(self, flt=None, projection=None, **kwargs):
        found = self._matching(flt)
        return _project(copy.deepcopy(found[0]), projection) if found else None

    async def insert_one(self, doc, **kwargs):
        doc.setdefault("_id", ObjectId())
        if self.unique and any(
            all(d.get(k) == doc.get(k) for k in self.unique) for d in self.data
        ):
            raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name}")
        self.data.append(copy.deepcopy(doc))
        return InsertOneResult(doc["_id"], True)

    async def update_one(self, flt, update, **kwargs):
        found = self._matching(flt)
        if found:
            _apply_update(found[0], update)
        return UpdateResult({"n": len(found[:1]), "nModified": len(found[:1])}, True)

    async def find_one_and_update(self, flt, update, return_document=False, **kwargs):
        found = self._matching(flt)
        if not found:
            return None
        before = copy.deepcopy(found[0])
        _apply_update(found[0], update)
        return copy.deepcopy(found[0]) if return_document else before

    async def delete_one(self, flt, **kwargs):
        found = self._matching(flt)[:1]
        for d in found:
            self.data.remove(d)
        return DeleteResult({"n": len(found)}, True)

    async def delete_many(self, flt, **kwargs):
        found = self._matching(flt)
        self.data = [d for d in self.data if d not in found]
        return DeleteResult({"n": len(found)}, True)

    async def count_documents(self, flt, **kwargs):
        return len(self._matching(flt))

    async def distinct(self, key, flt=None, **kwargs):
        values = []
        for d in self._matching(flt):
            value = _get(d, key)
            if value is not _MISSING and value not in values:
                values.append(value)
        return values

    def aggregate(self, pipeline, **kwargs):
        return MockCursor(_run_pipeline(copy.deepcopy(self.data), pipeline))


class MockDB:
    """Base en mémoire exposant les collections par nom (`db["challenges"]`)."""

    def __init__(self):
        self.client = None
        self.collections = {}
        for name in (CHALLENGES, USER_CHALLENGES, TIPS, EVENTS, USERS):
            self[name]

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = MockCollection(name, UNIQUE_KEYS.get(name))
        return self.collections[name]

    async def command(self, name, **kwargs):
        return {"ok": 1.0}


@pytest.fixture
def mock_db():
    return MockDB()


@pytest.fixture
def client(mock_db):
    from app.main import app

    app.dependency_overrides[get_db] = lambda: mock_db
    c = TestClient(app)
    yield c
    app.dependency_overrides.clear()
