"""Community job board with an admin moderation workflow."""
