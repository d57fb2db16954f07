class ContainerError(Exception):
    """Base class for dependency container failures."""


class UnresolvedTokenError(ContainerError, LookupError):
    def __init__(self, token: str) -> None:
        super().__init__(f"No registration for token: {token}")
        self.token = token


class CyclicDependencyError(ContainerError):
    def __init__(self, path: list[str]) -> None:
        super().__init__("Cyclic dependency: " + " -> ".join(path))
        self.path = list(path)
