"""Health Hub Dashboard API."""
