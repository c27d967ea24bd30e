"""Static tables for the recommendation engine."""
