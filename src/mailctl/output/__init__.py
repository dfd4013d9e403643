"""Output layer: turns ServiceResult and mail data into text."""
