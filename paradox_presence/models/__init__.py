"""Plain data records shared across the application."""
