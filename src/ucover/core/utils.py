"""Small core utilities used across the project."""

import logging
import os

# Set up a module-level logger
logger = logging.getLogger(__name__)


def get_user_home():
    """Return the home directory of the current user."""
    return os.path.expanduser("~")


def get_default_repository_path():
    """Conventional location of the local Maven repository."""
    return os.path.join(get_user_home(), ".m2", "repository")
