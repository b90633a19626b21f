"""Generation client: one awaited backend call, bounded by a timeout.

Calls are metered and never retried here: a failed call surfaces to the
caller, who may re-submit at the user's request.
"""

from __future__ import annotations

import asyncio
import logging

from consentlab.core.exceptions import BackendError, BackendTimeoutError
from consentlab.hooks.usage import record_call
from consentlab.inference.protocols import (
    GenerationRequest,
    GenerationResult,
    IGenerationBackend,
    InlineImage,
)

log = logging.getLogger(__name__)


class GenerationClient:
    """Wraps an ``IGenerationBackend`` with timeout, error mapping and usage accounting."""

    def __init__(self, backend: IGenerationBackend, *, timeout: float = 60.0) -> None:
        self._backend = backend
        self._timeout = timeout

    @property
    def backend(self) -> IGenerationBackend:
        return self._backend

    async def generate(
        self,
        prompt: str,
        *,
        inline_image: InlineImage | None = None,
        operation: str = "generate",
    ) -> str:
        """Send ``prompt`` and return the response text.

        Raises:
            BackendTimeoutError: The call exceeded the configured timeout.
            BackendError: The backend raised for any other reason.
        """
        request = GenerationRequest(prompt=prompt, inline_image=inline_image, operation=operation)
        try:
            result: GenerationResult = await asyncio.wait_for(
                self._backend.generate(request), timeout=self._timeout
            )
        except asyncio.TimeoutError as e:
            record_call(operation, failed=True)
            log.warning("Generation timed out", extra={"operation": operation, "timeout": self._timeout})
            raise BackendTimeoutError(
                f"{operation} did not complete within {self._timeout:.0f}s"
            ) from e
        except BackendError:
            record_call(operation, failed=True)
            raise
        except Exception as e:
            record_call(operation, failed=True)
            log.warning("Generation failed: %s", e, extra={"operation": operation})
            raise BackendError(f"{operation} failed: {e}") from e

        record_call(operation, result.usage)
        if result.finish_reason == "max_output_reached":
            log.warning("Generation truncated at max output", extra={"operation": operation})
        return result.text
