"""Error handling utilities."""


class PropLandError(Exception):
    """Base exception for the PropLand backend."""
    pass


class ConfigurationError(PropLandError):
    """Required configuration is missing."""
    pass


class SupabaseError(PropLandError):
    """Listing store (Supabase) operation error."""
    pass


class StoreReadError(SupabaseError):
    """Fetching a collection from the listing store failed."""
    pass


class StoreWriteError(SupabaseError):
    """Inserting or deleting a listing failed."""
    pass


class AuthError(PropLandError):
    """Login, signup or logout was rejected by the store."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
