"""HTTP API for InnVest analytics."""
