"""Main entry point when executing blobcache as a package.

This allows running the package using python -m blobcache.
"""

from blobcache.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
