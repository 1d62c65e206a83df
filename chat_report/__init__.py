"""Post test run reports to chat endpoints."""
