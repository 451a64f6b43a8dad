"""Container registry service utilities."""
