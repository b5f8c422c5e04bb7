class TokenHashCollisionError(Exception):
    """A freshly issued token digest already exists in the session store.

    With 256 bits of token entropy this indicates a broken RNG or a
    tampered store; it is never handled by overwriting the existing row.
    """
