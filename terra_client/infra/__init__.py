"""Infrastructure: HTTP transport, session state and logging."""
