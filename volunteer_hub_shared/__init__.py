"""Pydantic schemas describing the Volunteer Hub wire format."""
