"""Output formatting — rich renderers and JSON for ServiceResult."""
