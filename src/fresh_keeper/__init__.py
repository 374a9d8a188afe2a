"""Food inventory tracking with expiry status and dinner recommendations."""
