"""
Utility functions for the application.
"""
from typing import Any, Dict


def track_file_name(song_hash: str, extension: str) -> str:
    """Build the stored audio file reference for a song."""
    return f"{song_hash}.{extension}"


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
