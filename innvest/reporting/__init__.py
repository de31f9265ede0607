"""Report exports for InnVest."""
