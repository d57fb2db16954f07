import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.pool import StaticPool

from .entities import Book, SAMPLE_BOOKS, UPDATABLE_FIELDS

logger = logging.getLogger(__name__)

FILTER_FIELDS = ("id",) + UPDATABLE_FIELDS
TEXT_FIELDS = ("title", "author")


def _clean_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS and v is not None}


def _clean_filter(flt: Dict[str, Any]) -> Dict[str, Any]:
    out = {}
    for k, v in flt.items():
        if v is None:
            continue
        if k not in FILTER_FIELDS:
            raise ValueError(f"unsupported filter field: {k}")
        out[k] = float(v) if k == "price" else v
    return out


class AbstractBookRepository(ABC):
    @abstractmethod
    def find_all(self) -> List[Book]: ...

    @abstractmethod
    def find_by_id(self, book_id: str) -> Optional[Book]: ...

    @abstractmethod
    def save(self, book: Book) -> Book: ...

    @abstractmethod
    def update(self, book_id: str, changes: Dict[str, Any]) -> Optional[Book]: ...

    @abstractmethod
    def delete(self, book_id: str) -> bool: ...

    @abstractmethod
    def find_by(self, flt: Dict[str, Any]) -> List[Book]:
        """Books matching every given field.

        ``title`` and ``author`` match as case-insensitive substrings, other
        fields by equality (``price`` is compared as a float). ``None`` values
        are ignored, so an empty filter matches all.
        """


class InMemoryBookRepository(AbstractBookRepository):
    def __init__(self, seed: bool = True) -> None:
        self._books: List[Book] = list(SAMPLE_BOOKS) if seed else []

    def find_all(self) -> List[Book]:
        return list(self._books)

    def find_by_id(self, book_id: str) -> Optional[Book]:
        for b in self._books:
            if b.id == book_id:
                return b
        return None

    def save(self, book: Book) -> Book:
        for i, b in enumerate(self._books):
            if b.id == book.id:
                self._books[i] = book
                return book
        self._books.append(book)
        return book

    def update(self, book_id: str, changes: Dict[str, Any]) -> Optional[Book]:
        for i, b in enumerate(self._books):
            if b.id == book_id:
                self._books[i] = replace(b, **_clean_changes(changes))
                return self._books[i]
        return None

    def delete(self, book_id: str) -> bool:
        for i, b in enumerate(self._books):
            if b.id == book_id:
                del self._books[i]
                return True
        return False

    def find_by(self, flt: Dict[str, Any]) -> List[Book]:
        crit = _clean_filter(flt)

        def match(book: Book) -> bool:
            for k, v in crit.items():
                actual = getattr(book, k)
                if k in TEXT_FIELDS:
                    if v.lower() not in actual.lower():
                        return False
                elif actual != v:
                    return False
            return True

        return [b for b in self._books if match(b)]


def _like_pattern(value: str) -> str:
    esc = value.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{esc}%"


def _register_unicode_lower(dbapi_conn, _record) -> None:
    dbapi_conn.create_function("py_lower", 1, lambda s: s.lower() if isinstance(s, str) else s, deterministic=True)


class SQLBookRepository(AbstractBookRepository):
    """Single ``books`` table behind a SQLAlchemy engine.

    ``sqlite://`` gives a private in-memory database that lives as long as
    the repository.
    """
    def __init__(self, dsn: str, seed: bool = True) -> None:
        kwargs: Dict[str, Any] = {"pool_pre_ping": True}
        if dsn.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if dsn in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        self._engine = create_engine(dsn, **kwargs)
        self._lower = "lower"
        if self._engine.url.get_backend_name() == "sqlite":
            # SQLite lower() folds ASCII only
            event.listen(self._engine, "connect", _register_unicode_lower)
            self._lower = "py_lower"
        self.init_schema(seed)

    def init_schema(self, seed: bool = True) -> None:
        with self._engine.begin() as conn:
            conn.execute(text("""
              CREATE TABLE IF NOT EXISTS books (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                author TEXT NOT NULL,
                price REAL NOT NULL
              )
            """))
            if not seed:
                return
            n = int(conn.execute(text("SELECT count(*) FROM books")).scalar_one())
            if n == 0:
                conn.execute(
                    text("INSERT INTO books (id, title, author, price) VALUES (:id, :title, :author, :price)"),
                    [vars(b) for b in SAMPLE_BOOKS],
                )
                logger.info("seeded %d sample books", len(SAMPLE_BOOKS))

    @staticmethod
    def _to_book(row) -> Book:
        return Book(id=row["id"], title=row["title"], author=row["author"], price=float(row["price"]))

    def find_all(self) -> List[Book]:
        with self._engine.begin() as conn:
            rows = conn.execute(text("SELECT id, title, author, price FROM books")).mappings().all()
        return [self._to_book(r) for r in rows]

    def find_by_id(self, book_id: str) -> Optional[Book]:
        with self._engine.begin() as conn:
            row = conn.execute(
                text("SELECT id, title, author, price FROM books WHERE id = :id"), {"id": book_id}
            ).mappings().first()
        return self._to_book(row) if row else None

    def save(self, book: Book) -> Book:
        # ON CONFLICT upsert works on both SQLite (>= 3.24) and PostgreSQL
        sql = """
          INSERT INTO books (id, title, author, price) VALUES (:id, :title, :author, :price)
          ON CONFLICT (id) DO UPDATE
             SET title = excluded.title, author = excluded.author, price = excluded.price
        """
        with self._engine.begin() as conn:
            conn.execute(text(sql), vars(book))
        return book

    def update(self, book_id: str, changes: Dict[str, Any]) -> Optional[Book]:
        existing = self.find_by_id(book_id)
        if existing is None:
            return None
        updated = replace(existing, **_clean_changes(changes))
        with self._engine.begin() as conn:
            conn.execute(
                text("UPDATE books SET title = :title, author = :author, price = :price WHERE id = :id"),
                vars(updated),
            )
        return updated

    def delete(self, book_id: str) -> bool:
        with self._engine.begin() as conn:
            res = conn.execute(text("DELETE FROM books WHERE id = :id"), {"id": book_id})
            return res.rowcount > 0

    def find_by(self, flt: Dict[str, Any]) -> List[Book]:
        where = ["1=1"]
        params: Dict[str, Any] = {}
        for k, v in _clean_filter(flt).items():
            if k in TEXT_FIELDS:
                where.append(f"{self._lower}({k}) LIKE :{k} ESCAPE '\\'")
                params[k] = _like_pattern(v)
            else:
                where.append(f"{k} = :{k}")
                params[k] = v
        sql = f"SELECT id, title, author, price FROM books WHERE {' AND '.join(where)}"
        with self._engine.begin() as conn:
            rows = conn.execute(text(sql), params).mappings().all()
        return [self._to_book(r) for r in rows]

    def close(self) -> None:
        self._engine.dispose()
