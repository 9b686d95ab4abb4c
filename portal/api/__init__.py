"""HTTP API for the candidate portal."""
