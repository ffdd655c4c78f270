"""Framework-agnostic domain types and errors."""
