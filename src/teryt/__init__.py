"""TERYT street and locality autocomplete."""
