"""Textual front end for the split-flap board."""
