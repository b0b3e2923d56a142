"""
Remote object key helpers.
"""


def normalize_key(key: str) -> str:
    """Strip one leading slash so '/dist/app.js' and 'dist/app.js' address the same object."""
    if key.startswith('/'):
        return key[1:]
    return key


def join_key(base: str, name: str) -> str:
    """Append a path segment to a key prefix with exactly one slash between them."""
    return base.rstrip('/') + '/' + name
