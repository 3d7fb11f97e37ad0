"""Configuration, logging and terminal styling shared by the codemod tools."""
