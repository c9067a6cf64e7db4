"""User-facing interfaces for notejournal."""
