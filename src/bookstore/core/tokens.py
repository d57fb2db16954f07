"""Tokens the application registers in its container."""

BOOK_REPOSITORY = "BookRepository"
LIST_BOOKS = "ListBooks"
GET_BOOK_BY_ID = "GetBookById"
CREATE_BOOK = "CreateBook"
UPDATE_BOOK = "UpdateBook"
DELETE_BOOK = "DeleteBook"
SEARCH_BOOKS = "SearchBooks"
BOOK_CONTROLLER = "BookController"
