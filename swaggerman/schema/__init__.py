from . import openapi, postman  # noqa: F401
