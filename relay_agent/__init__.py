"""Polling print agent for the print relay."""
