import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

from .errors import CyclicDependencyError, UnresolvedTokenError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DependencyManifest:
    """Ordered dependency tokens declared per constructor."""
    def __init__(self) -> None:
        self._tokens: Dict[type, Tuple[str, ...]] = {}

    def declare(self, constructor: type, tokens: Sequence[str]) -> None:
        self._tokens[constructor] = tuple(tokens)

    def tokens_for(self, constructor: type) -> Tuple[str, ...]:
        return self._tokens.get(constructor, ())

    def inject(self, *tokens: str) -> Callable[[Type[T]], Type[T]]:
        def decorate(cls: Type[T]) -> Type[T]:
            self.declare(cls, tokens)
            return cls
        return decorate


@dataclass(frozen=True)
class Registration:
    target: Callable[..., Any]
    is_factory: bool = False
    depends_on: Optional[Tuple[str, ...]] = None


class Container:
    """DI container: string tokens, lazy per-token singletons, positional auto-wiring.

    A class registered without ``depends_on`` takes its dependency tokens from
    the manifest (none when the manifest has no entry). Resolution is not
    thread-safe; build the graph from one thread.
    """
    def __init__(self, manifest: DependencyManifest | None = None) -> None:
        self.manifest = manifest if manifest is not None else DependencyManifest()
        self._registry: Dict[str, Registration] = {}
        self._singletons: Dict[str, Any] = {}
        self._resolving: List[str] = []

    def register(self, token: str, constructor: type, depends_on: Sequence[str] | None = None) -> None:
        deps = tuple(depends_on) if depends_on is not None else None
        self._registry[token] = Registration(constructor, depends_on=deps)
        logger.debug("registered %s -> %s", token, getattr(constructor, "__name__", constructor))

    def register_factory(self, token: str, factory: Callable[[], Any]) -> None:
        self._registry[token] = Registration(factory, is_factory=True)
        logger.debug("registered factory %s", token)

    def is_registered(self, token: str) -> bool:
        return token in self._registry

    __contains__ = is_registered

    def dependencies_of(self, token: str) -> Tuple[str, ...]:
        reg = self._registry.get(token)
        if reg is None:
            raise UnresolvedTokenError(token)
        if reg.is_factory:
            return ()
        if reg.depends_on is not None:
            return reg.depends_on
        return self.manifest.tokens_for(reg.target)

    def dependency_graph(self) -> Dict[str, Tuple[str, ...]]:
        return {token: self.dependencies_of(token) for token in self._registry}

    def resolve(self, token: str) -> Any:
        if token in self._singletons:
            return self._singletons[token]
        if token in self._resolving:
            start = self._resolving.index(token)
            raise CyclicDependencyError(self._resolving[start:] + [token])
        reg = self._registry.get(token)
        if reg is None:
            raise UnresolvedTokenError(token)

        self._resolving.append(token)
        try:
            if reg.is_factory:
                instance = reg.target()
            else:
                args = [self.resolve(dep) for dep in self.dependencies_of(token)]
                instance = reg.target(*args)
        finally:
            self._resolving.pop()

        self._singletons[token] = instance
        logger.debug("constructed %s (%s)", token, type(instance).__name__)
        return instance
