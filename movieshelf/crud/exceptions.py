"""
Errors raised by the repository layer.

Each error carries the HTTP status the API answers with and a
message that is safe to show to clients.
"""


class MovieShelfError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail=None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(MovieShelfError):
    """A required field is missing or empty"""
    status_code = 400

    def __init__(self, field: str, label: str = None):
        self.field = field
        super().__init__(f"{label or field} is required")


class CategoryNotFound(MovieShelfError):
    status_code = 400
    detail = "Category not in database"


class DuplicateMovie(MovieShelfError):
    status_code = 400
    detail = "This movie already exists"


class NotFound(MovieShelfError):
    status_code = 404
    detail = "Movie not found"


class DuplicateDirector(MovieShelfError):
    status_code = 400
    detail = "Director already exists"
