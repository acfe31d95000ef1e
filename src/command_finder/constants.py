"""Central constants for command_finder."""

import os
import tempfile

# Records handed to the catalog store per INSERT batch during a rebuild.
DEFAULT_BATCH_SIZE = 500

# Seconds a single catalog query may run before it is treated as unavailable.
DEFAULT_QUERY_TIMEOUT = 2.0

# Catalog database location when the config file does not set one.
DEFAULT_STORAGE_PATH = os.path.join(tempfile.gettempdir(), "command_finder", "catalog.db")

DEFAULT_CONFIG_PATH = ".cmdfind/config.toml"

# Candidate annotation markers.
CURRENT_MARKER = " (current)"
NO_DOCUMENTATION = "[no documentation]"
NOT_A_FUNCTION = "[not a function]"
NO_MATCH = "[No match]"
