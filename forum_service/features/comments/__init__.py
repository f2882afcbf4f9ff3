"""Comments: top-level comments of a post and replies to a comment."""
