"""Runtime configuration, read from the environment at import time."""

import os

# Maximum number of images checked at the same time
DEFAULT_CONCURRENCY = int(os.environ.get("SIMILAR_TAG_CHECK_CONCURRENCY", 5))

# Number of tags requested per registry page
TAG_PAGE_SIZE = int(os.environ.get("SIMILAR_TAG_CHECK_PAGE_SIZE", 1000))

REGISTRY_TIMEOUT_SECONDS = float(os.environ.get("SIMILAR_TAG_CHECK_TIMEOUT_SECONDS", 30.0))

# Registries reached over plain http, e.g. "localhost:5000,registry.lan"
INSECURE_REGISTRIES = frozenset(
    host.strip().lower()
    for host in os.environ.get("SIMILAR_TAG_CHECK_INSECURE_REGISTRIES", "").split(",")
    if host.strip()
)

LOG_LEVEL = os.environ.get("SIMILAR_TAG_CHECK_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
