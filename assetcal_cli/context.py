"""Shared CLI context with lazy-initialized dependencies."""

from assetcal.config import AssetCalConfig
from assetcal.engine import AssetCalEngine


class CLIContext:
    """Shared context for CLI commands.

    Usage:
        ctx = CLIContext()
        result = ctx.engine.run_sweep()
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        config: AssetCalConfig | None = None,
        engine: AssetCalEngine | None = None,
    ):
        """Initialize CLI context.

        Args:
            verbose: If True, show informational logging
            quiet: If True, suppress non-error output
            config: Configuration override (defaults to environment)
            engine: Engine override, e.g. bound to a test database
        """
        self.verbose = verbose
        self.quiet = quiet
        self._config = config
        self._engine = engine

    @property
    def config(self) -> AssetCalConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            if self._engine is not None:
                self._config = self._engine.config
            else:
                self._config = AssetCalConfig.from_env()
        return self._config

    @property
    def engine(self) -> AssetCalEngine:
        """Get engine (lazy-loaded)."""
        if self._engine is None:
            self._engine = AssetCalEngine(self.config)
        return self._engine


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext | None) -> None:
    """Set the global CLI context."""
    global _ctx
    _ctx = ctx
