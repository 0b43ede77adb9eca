"""Template rendering for selected views."""
