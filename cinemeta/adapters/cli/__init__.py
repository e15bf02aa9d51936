"""Adaptateur CLI de Cinemeta (typer + rich)."""
