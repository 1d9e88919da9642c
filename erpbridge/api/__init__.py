"""HTTP surface: progress events and migration planning."""
