"""Read-only snapshot sharing service for toc-ideator."""
