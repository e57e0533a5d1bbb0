"""Detection, save location, session tracking and the poll loop."""
