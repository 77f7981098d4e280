"""Infrastructure shared by the core model and the CLI: configuration,
logging locations and filesystem helpers."""
