"""Infrastructure: configuration, persistence, email and platform clients."""
