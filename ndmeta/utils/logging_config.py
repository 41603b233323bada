"""
Logging setup for ndmeta.

Library modules log below the ``ndmeta`` logger and stay silent until it is
configured. Two groups of records can be tuned separately from the rest:

* catalog bookkeeping (``ndmeta.core.store``, ``ndmeta.core.registry``):
  DEBUG records when an item or info factory is registered or replaced;
* view enumeration (``ndmeta.view.store_view``, ``ndmeta.view.subsample_view``):
  WARNING records when ``items()`` skips a malformed item.
"""

import logging
import logging.handlers
import sys

PACKAGE_LOGGER = "ndmeta"
CATALOG_LOGGERS = ("ndmeta.core.store", "ndmeta.core.registry")
VIEW_LOGGERS = ("ndmeta.view.store_view", "ndmeta.view.subsample_view")


def _set_group_level(names, level):
    for name in names:
        # NOTSET defers to the package logger
        logging.getLogger(name).setLevel(logging.NOTSET if level is None else level)


def setup_logging(
    log_level=logging.INFO, log_file=None, catalog_level=None, view_level=None
):
    """
    Route ndmeta log records to stdout and, optionally, a rotating file.

    Calling it again replaces the previous configuration.

    Args:
        log_level (int): Minimum level for ndmeta records in general.
        log_file (str): Path to the log file. If None, logs are not saved to a file.
        catalog_level (int): Level for store and registry bookkeeping, e.g.
            ``logging.DEBUG`` to trace item replacement while keeping the
            rest at ``log_level``. None follows ``log_level``.
        view_level (int): Level for view enumeration, e.g. ``logging.ERROR``
            to silence skipped-item warnings. None follows ``log_level``.

    Returns:
        logging.Logger: The configured ``ndmeta`` logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)
    _set_group_level(CATALOG_LOGGERS, catalog_level)
    _set_group_level(VIEW_LOGGERS, view_level)

    # Remove all existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    # Handlers must let through the most verbose group
    handler_level = min(
        level for level in (log_level, catalog_level, view_level) if level is not None
    )
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(handler_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5
        )
        file_handler.setLevel(handler_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(
        f"Logging configured (level {logging.getLevelName(log_level)}, "
        f"catalog {logging.getLevelName(catalog_level or log_level)}, "
        f"views {logging.getLevelName(view_level or log_level)})"
    )
    return logger
