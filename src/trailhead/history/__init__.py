"""History — the coordinator between a location store and its observers."""
