"""Application logging and the data-quality log."""
