# media_storage/services/exceptions.py


class CorsConfigurationError(Exception):
    """Raised when the bucket CORS policy cannot be built, read or applied."""
