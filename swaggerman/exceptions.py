from typing import Optional


class SwaggermanError(Exception):
    pass


class ParseError(SwaggermanError, ValueError):
    """The spec file is missing, unreadable or not a parseable document."""


class SchemaError(SwaggermanError, ValueError):
    """A schema node can't be turned into example data."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class HttpError(SwaggermanError):
    """A call to the Postman API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
