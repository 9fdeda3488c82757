"""Network helpers shared by shopfront collaborators."""
