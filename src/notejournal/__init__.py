"""notejournal - aggregated DOING/TODO/LATER index for a markdown diary."""

__version__ = "0.1.0"
