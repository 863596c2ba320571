"""HTTP application for projectdesk."""
