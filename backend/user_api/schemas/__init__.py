"""API Schemas — request and response models for the HTTP boundary."""
