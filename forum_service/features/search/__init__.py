"""Post search: free text over title and content, plus tag filters."""
