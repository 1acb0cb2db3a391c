"""Built-in sub-command groups for the kongadmin CLI."""
