"""Content persistence and query service for site content."""
