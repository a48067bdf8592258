"""Command-line commands for eisenboard."""
