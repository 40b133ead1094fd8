"""HTTP API for the formatter and the contrast checker."""
