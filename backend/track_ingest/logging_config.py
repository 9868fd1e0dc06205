"""
Logging Setup

Library modules only create loggers; the host process calls
setup_logging() once at startup.
"""

import logging
import sys
from typing import Optional

from track_ingest.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the ingestion pipeline."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )
