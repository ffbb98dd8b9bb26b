"""SQLite persistence for interview sessions."""
