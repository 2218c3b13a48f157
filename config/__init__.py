"""history-lens configuration package."""
