"""Pydantic data contracts shared by the engines and the HTTP adapter."""
