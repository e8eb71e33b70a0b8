"""Published game delivery service."""
