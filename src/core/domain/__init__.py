"""Domain models and value types.

Pure, strict data structures (Pydantic v2). The domain knows nothing about
HTTP, streams or the CLI.
"""
