"""Factory for registry submitter instances."""

from registry_gate.adapters.registry.base import AbstractDocumentSubmitter
from registry_gate.adapters.registry.httpx_client import HttpxDocumentSubmitter
from registry_gate.core.config import RegistrySettings, settings
from registry_gate.core.errors import ConfigurationAppError


def create_document_submitter(
    registry_settings: RegistrySettings | None = None,
) -> AbstractDocumentSubmitter:
    """Instantiate the registry client from configuration.

    Args:
        registry_settings: Optional settings; defaults to global settings.

    Returns:
        AbstractDocumentSubmitter: Configured HTTP submitter.

    Raises:
        ConfigurationAppError: If the base URL is not an http(s) URL.
    """
    cfg = registry_settings or settings.registry

    if not cfg.base_url.startswith(("http://", "https://")):
        raise ConfigurationAppError(
            code="registry_invalid_base_url",
            message=f"REGISTRY_BASE_URL must be an http(s) URL, got '{cfg.base_url}'",
        )

    return HttpxDocumentSubmitter(
        base_url=cfg.base_url,
        create_path=cfg.create_path,
        timeout_seconds=cfg.timeout_seconds,
    )
