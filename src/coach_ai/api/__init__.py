"""HTTP surface of the coach functions."""
