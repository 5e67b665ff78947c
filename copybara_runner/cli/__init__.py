"""Command-line interface for the Copybara runner."""
