"""Graph projections of the model."""
