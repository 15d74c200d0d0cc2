"""Console entry point: ``python -m finance_tracker``."""

import structlog

from finance_tracker.audit import configure_logging
from finance_tracker.config import get_settings
from finance_tracker.errors import StorageError
from finance_tracker.orchestrator import create_app
from finance_tracker.ui import ConsoleDisplay, MenuController


logger = structlog.get_logger(__name__)


def main() -> None:
    """Load all profiles, then run the interactive menu until exit."""
    configure_logging(get_settings().app.effective_log_level)
    try:
        app = create_app()
    except StorageError as e:
        logger.error("startup_load_failed", error=str(e))
        raise SystemExit(f"Could not load saved data: {e}")
    MenuController(app, ConsoleDisplay()).run()


if __name__ == "__main__":
    main()
