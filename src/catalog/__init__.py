"""Library catalog inventory API.

Book records with lend/return bookkeeping, served over FastAPI and stored
through SQLModel.
"""

__version__ = "1.0.0"
