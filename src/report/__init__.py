"""Read-only analytical reports over the movie database."""
