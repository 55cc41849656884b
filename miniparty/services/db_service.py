import os
import sqlite3
from abc import ABC, abstractmethod
from contextlib import closing
from typing import List

from fastapi.concurrency import run_in_threadpool
from supabase import create_async_client, AsyncClient

from miniparty.core.errors import StorageError
from miniparty.core.logger import logger
from miniparty.models.booking import Booking, BookingCreate

TABLE = "bookings"
COLUMNS = "id, name, email, phone, date, time, duration, guests"

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS bookings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL,
    phone TEXT NOT NULL,
    date TEXT NOT NULL,
    time TEXT NOT NULL,
    duration INTEGER NOT NULL DEFAULT 2,
    guests INTEGER NOT NULL
)
"""

class BookingStore(ABC):
    """
    Append-only booking persistence.
    Bookings are listed by date, then time, both compared as plain strings,
    so callers must send zero-padded YYYY-MM-DD dates and 24h HH:MM times.
    """

    @abstractmethod
    async def initialize(self) -> None:
        ...

    @abstractmethod
    async def insert(self, record: BookingCreate) -> Booking:
        ...

    @abstractmethod
    async def list_all(self) -> List[Booking]:
        ...

    @abstractmethod
    async def ping(self) -> None:
        ...

    async def close(self) -> None:
        pass


class SQLiteBookingStore(BookingStore):
    def __init__(self, path: str):
        self.path = path

    def _run(self, operation: str, fn):
        # A short-lived connection per call, so threadpool workers never share one
        try:
            with closing(sqlite3.connect(self.path)) as conn:
                conn.row_factory = sqlite3.Row
                with conn:
                    return fn(conn)
        except sqlite3.Error as e:
            logger.error(f"❌ DB Error ({operation}): {e}")
            raise StorageError(f"SQLite {operation} failed: {e}") from e

    def _initialize(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._run("initialize", lambda conn: conn.execute(CREATE_TABLE_SQL))
        logger.info(f"✅ Database initialized (SQLite: {self.path})")

    def _insert(self, record: BookingCreate) -> Booking:
        def write(conn):
            cursor = conn.execute(
                "INSERT INTO bookings (name, email, phone, date, time, duration, guests) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (record.name, record.email, record.phone, record.date,
                 record.time, record.duration, record.guests),
            )
            return cursor.lastrowid

        booking_id = self._run("insert", write)
        return Booking(id=booking_id, **record.model_dump())

    def _list_all(self) -> List[Booking]:
        rows = self._run(
            "list_all",
            lambda conn: conn.execute(
                f"SELECT {COLUMNS} FROM bookings ORDER BY date ASC, time ASC, id ASC"
            ).fetchall(),
        )
        return [Booking(**dict(row)) for row in rows]

    async def initialize(self) -> None:
        await run_in_threadpool(self._initialize)

    async def insert(self, record: BookingCreate) -> Booking:
        return await run_in_threadpool(self._insert, record)

    async def list_all(self) -> List[Booking]:
        return await run_in_threadpool(self._list_all)

    async def ping(self) -> None:
        await run_in_threadpool(self._run, "ping", lambda conn: conn.execute("SELECT 1"))


class SupabaseBookingStore(BookingStore):
    """Bookings table hosted on Supabase. The table itself is provisioned in Supabase."""

    def __init__(self, url: str, key: str, client: AsyncClient = None):
        self.url = url
        self.key = key
        self._client = client

    async def get_client(self) -> AsyncClient:
        if not self._client:
            if not self.url or not self.key:
                logger.error("❌ Supabase credentials missing (SUPABASE_URL or SUPABASE_KEY)")
                raise StorageError("Supabase credentials missing")
            try:
                self._client = await create_async_client(self.url, self.key)
                logger.info("✅ Supabase Async client initialized")
            except Exception as e:
                logger.error(f"❌ Failed to initialize Supabase Async: {e}")
                raise StorageError(f"Supabase connection failed: {e}") from e
        return self._client

    async def _execute(self, operation: str, query):
        try:
            return await query.execute()
        except Exception as e:
            logger.error(f"❌ DB Error ({operation}): {e}")
            raise StorageError(f"Supabase {operation} failed: {e}") from e

    async def initialize(self) -> None:
        await self.ping()
        logger.info("✅ Database initialized (Supabase)")

    async def insert(self, record: BookingCreate) -> Booking:
        client = await self.get_client()
        response = await self._execute("insert", client.table(TABLE).insert(record.model_dump()))
        if not response.data:
            logger.error("❌ DB Error (insert): Supabase returned no rows")
            raise StorageError("Supabase insert returned no rows")
        return Booking(**response.data[0])

    async def list_all(self) -> List[Booking]:
        client = await self.get_client()
        query = client.table(TABLE)\
            .select(COLUMNS)\
            .order("date", desc=False)\
            .order("time", desc=False)\
            .order("id", desc=False)
        response = await self._execute("list_all", query)
        return [Booking(**row) for row in response.data or []]

    async def ping(self) -> None:
        client = await self.get_client()
        await self._execute("ping", client.table(TABLE).select("id").limit(1))

    async def close(self) -> None:
        self._client = None


def create_store(settings) -> BookingStore:
    """Builds the booking store selected by STORAGE_BACKEND."""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "sqlite":
        return SQLiteBookingStore(settings.DATABASE_PATH)
    if backend == "supabase":
        return SupabaseBookingStore(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")
