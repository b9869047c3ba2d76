"""Command-line tools for an R2 / S3-compatible bucket."""
