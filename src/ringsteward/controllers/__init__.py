"""Controllers: ring assignment and dataset history."""
