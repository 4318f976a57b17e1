"""Services Layer: use-case orchestration over repository protocols."""
