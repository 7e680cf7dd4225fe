"""Application package for the chat accounts API."""
