"""Output layer — turns ServiceResult into JSON, quiet, or Rich text."""
