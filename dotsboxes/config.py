"""
Configuration - Environment-driven engine settings.

Read once at import time. Override by exporting the variables
before starting the process.
"""

import os

DOTSBOXES_MAX_BOARD_SIZE = int(os.getenv("DOTSBOXES_MAX_BOARD_SIZE", "50"))
DOTSBOXES_DEFAULT_ROWS = int(os.getenv("DOTSBOXES_DEFAULT_ROWS", "3"))
DOTSBOXES_DEFAULT_COLS = int(os.getenv("DOTSBOXES_DEFAULT_COLS", "3"))
DOTSBOXES_LOG_LEVEL = os.getenv("DOTSBOXES_LOG_LEVEL", "WARNING").upper()
