"""Command-line interface for agentkit."""
