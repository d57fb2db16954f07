from dataclasses import dataclass

@dataclass(frozen=True)
class Book:
    id: str
    title: str
    author: str
    price: float

UPDATABLE_FIELDS = ("title", "author", "price")

SAMPLE_BOOKS = (
    Book("550e8400-e29b-41d4-a716-446655440000", "Clean Code", "Robert C. Martin", 30.0),
    Book("550e8400-e29b-41d4-a716-446655440001", "The Pragmatic Programmer", "Andrew Hunt", 25.0),
)
