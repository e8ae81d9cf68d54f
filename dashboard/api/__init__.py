"""HTTP surface over the dashboard queries."""
