"""
Fixtures compartidas.

FakeSupabase imita la porción del cliente de supabase-py que usan los
repositorios: query builder encadenable sobre tablas en memoria,
Storage y Auth. Permite inyectar fallas por tabla y operación.
"""

import uuid
from types import SimpleNamespace

import pytest

from vitrina.auth import AuthService
from vitrina.config import get_settings
from vitrina.database import (
    ContactMessageRepository,
    ImageStorage,
    PropertyImageRepository,
    PropertyRepository,
    SupabaseClient,
    UserRoleRepository,
)

BUCKET = "property-images"
PUBLIC_URL = f"https://fake.supabase.co/storage/v1/object/public/{BUCKET}/"
EMBED_FIELDS = ("id", "image_url", "is_primary", "display_order")


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Query builder en memoria: select/insert/update/delete + eq/order/limit."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = None
        self.payload = None
        self.embed_images = False
        self.filters = []
        self.order_by = None
        self.limit_n = None

    def select(self, columns: str = "*"):
        self.op = "select"
        self.embed_images = "property_images(" in columns
        return self

    def insert(self, data):
        self.op = "insert"
        self.payload = data
        return self

    def update(self, data: dict):
        self.op = "update"
        self.payload = data
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column: str, value):
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, n: int):
        self.limit_n = n
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self) -> FakeResponse:
        self.db.calls.append((self.table, self.op, tuple(self.filters)))
        self.db.maybe_fail(self.table, self.op)
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for item in payload:
                row = dict(item)
                row.setdefault("id", str(uuid.uuid4()))
                rows.append(row)
                created.append(dict(row))
            return FakeResponse(created)

        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return FakeResponse(updated)

        if self.op == "delete":
            deleted = [dict(row) for row in rows if self._matches(row)]
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResponse(deleted)

        selected = [dict(row) for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            selected.sort(
                key=lambda row: (row.get(column) is None, row.get(column) or 0),
                reverse=desc,
            )
        if self.limit_n is not None:
            selected = selected[: self.limit_n]
        if self.embed_images:
            for row in selected:
                row["property_images"] = [
                    {key: img.get(key) for key in EMBED_FIELDS}
                    for img in self.db.tables.get("property_images", [])
                    if img.get("property_id") == row["id"]
                ]
        return FakeResponse(selected)


class FakeBucket:
    def __init__(self, db: "FakeSupabase", name: str):
        self.db = db
        self.name = name

    def upload(self, path: str, data: bytes, options: dict = None):
        if self.db.fail_uploads:
            raise RuntimeError("storage unavailable")
        if self.db.uploads_left is not None:
            if self.db.uploads_left == 0:
                raise RuntimeError("storage unavailable")
            self.db.uploads_left -= 1
        self.db.objects[path] = data
        return {"path": path}

    def get_public_url(self, path: str) -> str:
        return f"https://fake.supabase.co/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths: list[str]):
        if self.db.fail_removals:
            raise RuntimeError("storage unavailable")
        for path in paths:
            self.db.objects.pop(path, None)
        return [{"name": path} for path in paths]


class FakeStorage:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def from_(self, name: str) -> FakeBucket:
        return FakeBucket(self.db, name)


class FakeAdminAuth:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth

    def sign_out(self, token: str):
        self.auth.tokens.pop(token, None)


class FakeAuth:
    """Usuarios por e-mail; cada login emite un token nuevo."""

    def __init__(self):
        self.users = {}
        self.tokens = {}
        self.admin = FakeAdminAuth(self)

    def add_user(self, email: str, password: str) -> str:
        user_id = str(uuid.uuid4())
        self.users[email] = (password, user_id)
        return user_id

    def issue_token(self, email: str) -> str:
        _, user_id = self.users[email]
        token = f"token-{uuid.uuid4().hex}"
        self.tokens[token] = (user_id, email)
        return token

    def sign_in_with_password(self, credentials: dict):
        email = credentials["email"]
        stored = self.users.get(email)
        if not stored or stored[0] != credentials["password"]:
            raise RuntimeError("Invalid login credentials")
        token = self.issue_token(email)
        return SimpleNamespace(
            user=SimpleNamespace(id=stored[1], email=email),
            session=SimpleNamespace(access_token=token),
        )

    def get_user(self, token: str):
        if token not in self.tokens:
            raise RuntimeError("invalid JWT")
        user_id, email = self.tokens[token]
        return SimpleNamespace(user=SimpleNamespace(id=user_id, email=email))


class FakeSupabase:
    """Cliente de supabase-py en memoria."""

    def __init__(self):
        self.tables = {}
        self.objects = {}
        self.calls = []
        self.failures = {}
        self.fail_uploads = False
        # Subidas que salen bien antes de empezar a fallar
        self.uploads_left = None
        self.fail_removals = False
        self.auth = FakeAuth()
        self.storage = FakeStorage(self)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, op: str, times: int = 1):
        """Las próximas `times` ejecuciones de `op` sobre `table` fallan."""
        self.failures[(table, op)] = times

    def maybe_fail(self, table: str, op: str):
        remaining = self.failures.get((table, op), 0)
        if remaining > 0:
            self.failures[(table, op)] = remaining - 1
            raise RuntimeError(f"network error on {table}.{op}")

    def count_calls(self, table: str, op: str) -> int:
        return sum(1 for t, o, _ in self.calls if t == table and o == op)

    # Helpers de carga

    def add_property(self, **fields) -> dict:
        row = {
            "id": str(uuid.uuid4()),
            "title": "Apartamento",
            "type": "apartamento",
            "location": "Alphaville",
            "status": "disponivel",
            "is_featured": False,
            "price": 500000,
            "bedrooms": 2,
            "bathrooms": 1,
            "parking": 1,
            "area": 80,
            "created_at": "2024-01-01T00:00:00+00:00",
        }
        row.update(fields)
        self.tables.setdefault("properties", []).append(row)
        return row

    def add_images(self, property_id: str, count: int) -> list[dict]:
        rows = []
        for idx in range(count):
            path = f"{property_id}/img{idx}.jpg"
            self.objects[path] = b"jpg"
            row = {
                "id": f"{property_id}-img{idx}",
                "property_id": property_id,
                "image_url": PUBLIC_URL + path,
                "is_primary": idx == 0,
                "display_order": idx,
            }
            self.tables.setdefault("property_images", []).append(row)
            rows.append(row)
        return rows

    def image_rows(self, property_id: str) -> list[dict]:
        rows = [
            img for img in self.tables.get("property_images", [])
            if img["property_id"] == property_id
        ]
        return sorted(rows, key=lambda img: img["display_order"] or 0)

    def grant_admin(self, user_id: str):
        self.tables.setdefault("user_roles", []).append({"user_id": user_id, "role": "admin"})


@pytest.fixture(autouse=True)
def supabase_env(monkeypatch):
    """Credenciales falsas: Settings nunca lee un entorno real."""
    monkeypatch.setenv("SUPABASE_URL", "https://fake.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
    monkeypatch.delenv("AGENT_CHAT_ID", raising=False)
    monkeypatch.setenv("STORAGE_BUCKET", BUCKET)
    monkeypatch.setenv("WRITE_RETRY_BACKOFF", "0")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def client(fake_db) -> SupabaseClient:
    return SupabaseClient(fake_db)


@pytest.fixture
def property_repo(client) -> PropertyRepository:
    return PropertyRepository(client)


@pytest.fixture
def image_repo(client) -> PropertyImageRepository:
    return PropertyImageRepository(client, retry_attempts=3, retry_backoff=0)


@pytest.fixture
def storage(client) -> ImageStorage:
    return ImageStorage(client, bucket=BUCKET)


@pytest.fixture
def contact_repo(client) -> ContactMessageRepository:
    return ContactMessageRepository(client)


@pytest.fixture
def auth_service(client) -> AuthService:
    return AuthService(
        auth_client=client,
        data_client=client,
        role_repo=UserRoleRepository(client),
    )


@pytest.fixture
def admin_token(fake_db) -> str:
    user_id = fake_db.auth.add_user("admin@vitrina.com", "secret123")
    fake_db.grant_admin(user_id)
    return fake_db.auth.issue_token("admin@vitrina.com")


@pytest.fixture
def visitor_token(fake_db) -> str:
    fake_db.auth.add_user("visitor@vitrina.com", "secret123")
    return fake_db.auth.issue_token("visitor@vitrina.com")
