from typing import Any, Dict, List, Mapping

from ..application.books import CreateBook, DeleteBook, GetBookById, ListBooks, SearchBooks, UpdateBook
from ..data.entities import Book


class BookNotFoundError(LookupError):
    def __init__(self, book_id: str) -> None:
        super().__init__(f"Book not found: {book_id}")
        self.book_id = book_id


class BookController:
    """HTTP-facing facade over the book use cases."""
    def __init__(
        self,
        list_books: ListBooks,
        get_book_by_id: GetBookById,
        create_book: CreateBook,
        update_book: UpdateBook,
        delete_book: DeleteBook,
        search_books: SearchBooks,
    ) -> None:
        self.list_books = list_books
        self.get_book_by_id = get_book_by_id
        self.create_book = create_book
        self.update_book = update_book
        self.delete_book = delete_book
        self.search_books = search_books

    def get_all(self) -> List[Book]:
        return self.list_books.execute()

    def get_by_id(self, book_id: str) -> Book:
        book = self.get_book_by_id.execute(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def create(self, data: Mapping[str, Any]) -> Book:
        return self.create_book.execute(data)

    def update(self, book_id: str, changes: Dict[str, Any]) -> Book:
        book = self.update_book.execute(book_id, changes)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def delete(self, book_id: str) -> None:
        if not self.delete_book.execute(book_id):
            raise BookNotFoundError(book_id)

    def search(self, raw: Mapping[str, Any]) -> List[Book]:
        return self.search_books.execute(raw)
