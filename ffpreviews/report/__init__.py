"""Aggregation, prompting, generation and artifact output for matchup previews."""
