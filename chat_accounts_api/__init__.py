"""
Top-level package for the chat accounts API.

The package provides no public exports; all functionality lives in
submodules under ``app`` (for example ``chat_accounts_api.app.main``).
"""
