# src/bookstore/api/app.py
import logging
import time

from fastapi import APIRouter, FastAPI, Request, status as http_status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

# --- Prometheus ---
from prometheus_client import Counter, Histogram, Gauge, CONTENT_TYPE_LATEST, generate_latest

from ..core import tokens
from ..core.container import Container
from .controller import BookController, BookNotFoundError
from .schemas import BookIn, BookOut, BookPatch

logger = logging.getLogger(__name__)

# ---------- Prometheus metrics ----------
REQ_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

REQ_LATENCY = Histogram(
    "http_request_duration_seconds",
    "Request latency (seconds)",
    ["method", "path", "status"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)

BOOKSTORE_HEALTH_OK = Gauge("bookstore_health_ok", "1 if /health is OK else 0")
BOOKSTORE_BOOKS_COUNT = Gauge("bookstore_books_count", "Number of books in the repository")


def _safe_path_label(request: Request) -> str:
    # route template, not the concrete path
    route = request.scope.get("route")
    if route and getattr(route, "path", None):
        return route.path
    return request.url.path


def _observe(request: Request, status: str, started: float) -> None:
    path = _safe_path_label(request)
    dur = max(0.0, time.perf_counter() - started)
    REQ_COUNT.labels(method=request.method, path=path, status=status).inc()
    REQ_LATENCY.labels(method=request.method, path=path, status=status).observe(dur)


def create_book_router(controller: BookController) -> APIRouter:
    router = APIRouter(prefix="/books", tags=["books"])

    @router.get("", response_model=list[BookOut])
    def get_all():
        return controller.get_all()

    # before /{book_id} so "search" is not taken for an id
    @router.get("/search", response_model=list[BookOut])
    def search(title: str | None = None, author: str | None = None, price: str | None = None):
        return controller.search({"title": title, "author": author, "price": price})

    @router.get("/{book_id}", response_model=BookOut)
    def get_by_id(book_id: str):
        return controller.get_by_id(book_id)

    @router.post("", response_model=BookOut, status_code=http_status.HTTP_201_CREATED)
    def create(payload: BookIn):
        return controller.create(payload.model_dump())

    @router.put("/{book_id}", response_model=BookOut)
    def update(book_id: str, payload: BookPatch):
        return controller.update(book_id, payload.model_dump(exclude_none=True))

    @router.delete("/{book_id}", status_code=http_status.HTTP_204_NO_CONTENT, response_class=Response)
    def delete(book_id: str):
        controller.delete(book_id)
        return Response(status_code=http_status.HTTP_204_NO_CONTENT)

    return router


def create_app(container: Container) -> FastAPI:
    """Build the HTTP app around an already-populated container.

    The controller (and so the whole object graph) is resolved here, so a
    missing registration fails at startup rather than on the first request.
    """
    controller: BookController = container.resolve(tokens.BOOK_CONTROLLER)

    app = FastAPI(title="bookstore")
    app.state.container = container
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.middleware("http")
    async def prometheus_middleware(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            _observe(request, "500", started)
            raise
        _observe(request, str(response.status_code), started)
        return response

    @app.exception_handler(BookNotFoundError)
    async def not_found_handler(request: Request, exc: BookNotFoundError):
        return JSONResponse(status_code=http_status.HTTP_404_NOT_FOUND, content={"error": "Book not found"})

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        if request.method == "POST":
            msg = "Title, author, and price are required"
        else:
            msg = "Invalid request"
        # echoed input may hold non-finite floats JSONResponse cannot encode
        details = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
        return JSONResponse(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            content={"error": msg, "details": jsonable_encoder(details)},
        )

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    app.include_router(create_book_router(controller))

    @app.get("/metrics")
    def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health")
    def health():
        try:
            n_books = len(controller.get_all())
            checks = {"repository": "ok", "books": n_books}
            ok = True
            BOOKSTORE_BOOKS_COUNT.set(n_books)
        except Exception as e:
            logger.warning("health check failed: %s", e)
            checks = {"repository": f"error: {e}", "books": None}
            ok = False
        BOOKSTORE_HEALTH_OK.set(1 if ok else 0)
        code = http_status.HTTP_200_OK if ok else http_status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(content={"ok": ok, "checks": checks}, status_code=code)

    return app
