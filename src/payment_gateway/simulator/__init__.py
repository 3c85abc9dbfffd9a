"""In-process acquiring bank simulator."""
