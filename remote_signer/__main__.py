"""Command-line entry point: ``python -m remote_signer``."""
import logging
import sys

import uvicorn
from pydantic import ValidationError

from remote_signer.config import get_settings
from remote_signer.exceptions import ConfigurationError
from remote_signer.logging_config import configure_logging
from remote_signer.main import create_app
from remote_signer.services.scheduler import SafeRemoteSigner

logger = logging.getLogger("remote_signer")


def run() -> None:
    """Load settings, configure logging and serve the operator API.

    Exits non-zero on invalid configuration. A network that fails to
    initialize aborts application startup, which uvicorn also reports
    with a non-zero exit.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(log_dir=None)
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.log_level, settings.log_dir)

    try:
        signer = SafeRemoteSigner(settings)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    uvicorn.run(
        create_app(signer),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
