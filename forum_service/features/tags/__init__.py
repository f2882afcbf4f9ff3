"""Tags attached to posts, used as search filters."""
