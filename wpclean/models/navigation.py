"""
Enums for the interactive cleanup session.

ViewMode names the two screens of the session; Intent names the discrete
operator actions decoded from the keyboard.
"""

from enum import Enum


class ViewMode(Enum):
    """Which list the session is currently showing."""
    FOLDERS = "folders"    # Backup folders, largest first
    FILES = "files"        # Archives inside one backup folder


class Intent(Enum):
    """Operator actions understood by CleanupSession."""
    UP = "up"
    DOWN = "down"
    OPEN = "open"          # Enter the selected folder
    DELETE = "delete"      # Delete selected folder or file
    BACK = "back"          # Return to the folder list
    QUIT = "quit"
