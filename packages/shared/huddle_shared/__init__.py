"""Pydantic schemas shared between the Huddle server and its clients."""
