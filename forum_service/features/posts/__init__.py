"""Post feed: cursor-paginated listing, optionally filtered by tags."""
