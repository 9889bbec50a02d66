"""GitHub Actions CLI."""
