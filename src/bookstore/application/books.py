import math
import uuid
from typing import Any, Dict, List, Mapping, Optional

from ..data.entities import Book
from ..data.repository import AbstractBookRepository


class ListBooks:
    def __init__(self, repository: AbstractBookRepository) -> None:
        self._repo = repository

    def execute(self) -> List[Book]:
        return self._repo.find_all()


class GetBookById:
    def __init__(self, repository: AbstractBookRepository) -> None:
        self._repo = repository

    def execute(self, book_id: str) -> Optional[Book]:
        return self._repo.find_by_id(book_id)


class CreateBook:
    def __init__(self, repository: AbstractBookRepository) -> None:
        self._repo = repository

    def execute(self, data: Mapping[str, Any]) -> Book:
        book = Book(
            id=str(uuid.uuid4()),
            title=data["title"],
            author=data["author"],
            price=float(data["price"]),
        )
        return self._repo.save(book)


class UpdateBook:
    def __init__(self, repository: AbstractBookRepository) -> None:
        self._repo = repository

    def execute(self, book_id: str, changes: Dict[str, Any]) -> Optional[Book]:
        return self._repo.update(book_id, changes)


class DeleteBook:
    def __init__(self, repository: AbstractBookRepository) -> None:
        self._repo = repository

    def execute(self, book_id: str) -> bool:
        return self._repo.delete(book_id)


class SearchBooks:
    """Normalize loose query input into a repository filter."""
    def __init__(self, repository: AbstractBookRepository) -> None:
        self._repo = repository

    def execute(self, raw: Mapping[str, Any]) -> List[Book]:
        flt: Dict[str, Any] = {}
        for key in ("title", "author"):
            v = raw.get(key)
            if isinstance(v, str) and v:
                flt[key] = v
        price = raw.get("price")
        if price is not None and not isinstance(price, bool):
            try:
                p = float(price)
            except (TypeError, ValueError):
                p = math.nan
            if not math.isnan(p):
                flt["price"] = p
        return self._repo.find_by(flt)
