"""Click commands registered on the lintbridge group."""
