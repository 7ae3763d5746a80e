"""Build a ready-to-use RelationshipUpdater from configuration.

Example usage:

    from liaison.bootstrap import bootstrap

    updater = bootstrap()
    result = await updater.ensure_relationship("2000", "1000", fields)
"""

from liaison.config import Settings, get_settings
from liaison.observability.logging import get_logger, setup_logging
from liaison.observability.metrics import setup_metrics
from liaison.relationship.factory import create_owner_store
from liaison.relationship.updater import RelationshipUpdater

logger = get_logger(__name__)


def bootstrap(settings: Settings | None = None) -> RelationshipUpdater:
    """Configure logging and metrics, then wire the configured store.

    Args:
        settings: Explicit settings (default: get_settings())

    Returns:
        RelationshipUpdater bound to the configured OwnerRecordStore
    """
    settings = settings or get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level="DEBUG" if settings.debug else log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    metrics_config = settings.observability.metrics
    setup_metrics(enabled=metrics_config.enabled, port=metrics_config.port)

    store = create_owner_store(settings.storage.owner)
    logger.info(
        "liaison_bootstrapped",
        app_name=settings.app_name,
        backend=store.backend,
        metrics=metrics_config.enabled,
    )
    return RelationshipUpdater(store)
