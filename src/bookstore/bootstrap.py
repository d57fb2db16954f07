import logging

from .api.controller import BookController
from .application.books import CreateBook, DeleteBook, GetBookById, ListBooks, SearchBooks, UpdateBook
from .core import tokens
from .core.config import AppConfig
from .core.container import Container
from .data.repository import InMemoryBookRepository, SQLBookRepository

logger = logging.getLogger(__name__)

USE_CASES = (
    (tokens.LIST_BOOKS, ListBooks),
    (tokens.GET_BOOK_BY_ID, GetBookById),
    (tokens.CREATE_BOOK, CreateBook),
    (tokens.UPDATE_BOOK, UpdateBook),
    (tokens.DELETE_BOOK, DeleteBook),
    (tokens.SEARCH_BOOKS, SearchBooks),
)


def build_container(config: AppConfig) -> Container:
    """Register the bookstore object graph in a fresh container."""
    container = Container()

    if config.repository == "sqlite":
        container.register_factory(
            tokens.BOOK_REPOSITORY,
            lambda: SQLBookRepository(config.dsn, seed=config.seed_sample_data),
        )
    else:
        container.register_factory(
            tokens.BOOK_REPOSITORY,
            lambda: InMemoryBookRepository(seed=config.seed_sample_data),
        )

    for token, use_case in USE_CASES:
        container.register(token, use_case, depends_on=[tokens.BOOK_REPOSITORY])

    container.register(tokens.BOOK_CONTROLLER, BookController, depends_on=[t for t, _ in USE_CASES])
    logger.info("container ready: repository=%s", config.repository)
    return container
