"""Custom exceptions for repomedic."""


class RepoMedicError(Exception):
    """Base exception for all repomedic errors."""


class ScanRootError(RepoMedicError):
    """Raised when the scan root does not exist or is not a directory."""

    def __init__(self, root_path: str, reason: str):
        self.root_path = root_path
        self.reason = reason
        super().__init__(f"Cannot scan '{root_path}': {reason}")


class UnknownCommandError(RepoMedicError):
    """Raised when a command or MCP tool name is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Tool '{name}' not found. Available: {', '.join(sorted(available)) or 'none'}"
        )


class RendererNotFoundError(RepoMedicError):
    """Raised when no renderer is registered for an output format."""
