"""Domain layer: webinar and submission models and their rule violations."""
