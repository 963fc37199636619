"""Module-level constants for the date tags engine."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "date_tags.yaml"
CONFIG_ENV_VAR = "DATE_TAGS_CONFIG"

# Header fields
CREATED_KEY = "created"
MODIFIED_KEY = "modified"
TYPE_KEY = "type"
TAGS_KEY = "tags"

# Formats
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NOTE_EXTENSION = ".md"

# Notifications
NOTIFICATION_PREFIX = "date-tags"

# Logging
LOG_LEVEL = "INFO"
