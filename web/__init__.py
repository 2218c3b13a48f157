"""history-lens Flask front end."""
