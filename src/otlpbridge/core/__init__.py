"""Domain models, ports and encoders with no transport dependencies."""
