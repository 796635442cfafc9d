"""Loading census CSV files from disk or over HTTP."""
