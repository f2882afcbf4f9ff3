"""Moderation reports: offset-paginated admin listing."""
