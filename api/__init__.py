"""HTTP routes for the interview session API."""
