import uuid

from bookstore.application.books import CreateBook, DeleteBook, GetBookById, ListBooks, SearchBooks, UpdateBook
from bookstore.data.entities import Book
from bookstore.data.repository import InMemoryBookRepository


class RecordingRepository(InMemoryBookRepository):
    def __init__(self) -> None:
        super().__init__(seed=True)
        self.filters = []

    def find_by(self, flt):
        self.filters.append(dict(flt))
        return super().find_by(flt)


def test_list_and_get():
    repo = InMemoryBookRepository()
    assert len(ListBooks(repo).execute()) == 2
    book = GetBookById(repo).execute("550e8400-e29b-41d4-a716-446655440000")
    assert book.title == "Clean Code"
    assert GetBookById(repo).execute("nope") is None


def test_create_assigns_fresh_uuid():
    repo = InMemoryBookRepository(seed=False)
    uc = CreateBook(repo)
    a = uc.execute({"title": "T", "author": "A", "price": "12.5"})
    b = uc.execute({"title": "T", "author": "A", "price": 12.5})
    assert str(uuid.UUID(a.id)) == a.id
    assert a.id != b.id
    assert a.price == 12.5
    assert repo.find_all() == [a, b]


def test_update_and_delete():
    repo = InMemoryBookRepository(seed=False)
    repo.save(Book("x", "Old", "A", 1.0))
    assert UpdateBook(repo).execute("x", {"price": 2.0}) == Book("x", "Old", "A", 2.0)
    assert UpdateBook(repo).execute("y", {"price": 2.0}) is None
    assert DeleteBook(repo).execute("x") is True
    assert DeleteBook(repo).execute("x") is False


def test_search_keeps_valid_fields():
    repo = RecordingRepository()
    res = SearchBooks(repo).execute({"title": "Clean", "author": "Robert", "price": "30"})
    assert repo.filters[-1] == {"title": "Clean", "author": "Robert", "price": 30.0}
    assert [b.title for b in res] == ["Clean Code"]


def test_search_drops_invalid_values():
    repo = RecordingRepository()
    res = SearchBooks(repo).execute({"title": "", "author": 42, "price": "abc", "isbn": "1"})
    assert repo.filters[-1] == {}
    assert len(res) == 2

    SearchBooks(repo).execute({"price": "nan"})
    assert repo.filters[-1] == {}

    SearchBooks(repo).execute({"price": None, "title": None})
    assert repo.filters[-1] == {}
