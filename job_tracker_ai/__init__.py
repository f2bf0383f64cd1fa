"""Job Tracker AI: turn a pasted job-posting URL into a structured application record."""
