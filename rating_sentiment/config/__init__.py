"""Default settings for the rating sentiment mapper."""
