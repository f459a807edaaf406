"""Commands registered on the cmdtrace CLI."""
