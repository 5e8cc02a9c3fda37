"""Posts on the campus feed."""
