"""Plain-text summaries of Koleo records for tool responses."""
