"""Rolling estimate history."""
