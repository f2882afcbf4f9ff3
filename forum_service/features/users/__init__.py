"""Forum users (authors of posts, comments and reports)."""
