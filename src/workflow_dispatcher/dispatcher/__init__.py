"""Workflow dispatch command and its collaborators."""
