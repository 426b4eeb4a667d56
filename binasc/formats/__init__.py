"""Binary to text formatters."""
