"""Host (Composer) side models: packages, operations, project files and options."""
