"""Chapter files and backups on disk."""
