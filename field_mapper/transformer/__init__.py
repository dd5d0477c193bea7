"""Named transformation and computation functions."""
