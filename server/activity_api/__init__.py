"""Step Activity API package."""
