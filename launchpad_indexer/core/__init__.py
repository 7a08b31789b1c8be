# launchpad_indexer/core/__init__.py
