"""Root conftest — shared test configuration."""

import os

# Plain-text logs keep pytest's captured output readable
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("MAX_FORMS_PER_PLAN", "5")
