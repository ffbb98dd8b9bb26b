"""Service wiring for the interview session API."""
