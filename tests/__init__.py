"""chclient test package."""
