"""HTTP surface for the agent controller."""
