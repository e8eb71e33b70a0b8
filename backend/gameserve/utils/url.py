"""URL and host utility functions."""
import re
from typing import Iterable, Optional

from gameserve.utils.exceptions import InvalidPathError


def normalize_file_path(raw: Optional[str]) -> Optional[str]:
    """
    Normalize a requested file path inside a published build.

    Args:
        raw: The path captured after the project identifier, already percent-decoded by the router

    Returns:
        A clean relative path, or None when no specific file was requested

    Raises:
        InvalidPathError: If the path tries to escape the build prefix
    """
    if not raw:
        return None
    cleaned = raw.replace("\\", "/")

    parts = []
    for part in cleaned.split("/"):
        if not part or part == ".":
            continue
        if part == "..":
            raise InvalidPathError("Path traversal is not allowed")
        parts.append(part)
    return "/".join(parts) or None


def parse_game_path(identifier: Optional[str], file_path: Optional[str]) -> tuple[str, Optional[str]]:
    """Validate the `{identifier}/{...filePath}` part of a game URL."""
    identifier = (identifier or "").strip()
    if not identifier or "/" in identifier:
        raise InvalidPathError("Missing project identifier")
    return identifier, normalize_file_path(file_path)


def host_from_header(host: Optional[str]) -> str:
    """Lowercase a Host header value and drop any port."""
    value = (host or "").strip().lower()
    if value.startswith("["):
        # IPv6 literal
        return value.split("]", 1)[0] + "]"
    return value.split(":", 1)[0].rstrip(".")


def slug_from_subdomain(host: str, base_domain: str, reserved: Iterable[str]) -> Optional[str]:
    """Return `{slug}` for hosts shaped like `{slug}.{base_domain}`."""
    match = re.match(rf"^([^.]+)\.{re.escape(base_domain.lower())}$", host)
    if not match or match.group(1) in set(reserved):
        return None
    return match.group(1)
