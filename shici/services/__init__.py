"""Services — per-request orchestration over the immutable application context."""
