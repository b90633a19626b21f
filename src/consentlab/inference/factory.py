"""Generation backend factory: resolves the backend from config."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

from consentlab.inference.client import GenerationClient
from consentlab.inference.protocols import IGenerationBackend
from consentlab.inference.realtime import LiteLLMBackend

if TYPE_CHECKING:
    from consentlab.core.config import AppSettings

log = logging.getLogger(__name__)


def _import_dotted_path(dotted: str) -> Any:
    """Import ``package.module:Attribute`` (or ``package.module.Attribute``)."""
    if ":" in dotted:
        module_path, attr = dotted.split(":", 1)
    else:
        module_path, _, attr = dotted.rpartition(".")
    if not module_path or not attr:
        raise ImportError(f"Invalid dotted path: {dotted!r}")
    module = importlib.import_module(module_path)
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ImportError(f"{module_path!r} has no attribute {attr!r}") from exc


def create_generation_backend(settings: AppSettings) -> IGenerationBackend:
    """Create a generation backend based on settings.

    When ``settings.llm.backend`` is ``"litellm"``, returns the built-in
    :class:`LiteLLMBackend`. When it's a dotted path like
    ``mypackage.backends:VertexBackend``, imports and instantiates the
    external class, passing ``settings`` to the constructor.

    Raises:
        ImportError: If the dotted-path class cannot be found.
        TypeError: If the resolved object is not callable.
    """
    backend_path = settings.llm.backend

    if backend_path == "litellm":
        log.info("Using built-in LiteLLMBackend (model=%s)", settings.llm.model)
        return LiteLLMBackend(settings.llm)

    log.info("Loading external generation backend: %s", backend_path)
    cls = _import_dotted_path(backend_path)

    if not callable(cls):
        raise TypeError(
            f"Generation backend {backend_path!r} resolved to {cls!r}, "
            "which is not callable"
        )

    return cls(settings)


def create_generation_client(
    settings: AppSettings,
    backend: IGenerationBackend | None = None,
) -> GenerationClient:
    """Build a ``GenerationClient`` using ``backend`` or the configured one."""
    return GenerationClient(
        backend or create_generation_backend(settings),
        timeout=settings.llm.timeout,
    )
