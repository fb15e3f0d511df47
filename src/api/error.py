from typing import Dict

from fastapi import status

from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def unauthorized(message: str) -> ClientError:
    return ClientError(Error("UNAUTHORIZED", message), status.HTTP_401_UNAUTHORIZED)


def forbidden(message: str) -> ClientError:
    return ClientError(Error("FORBIDDEN", message), status.HTTP_403_FORBIDDEN)


def raise_for_error(error: Error, status_map: Dict[str, int]):
    """
    Raise the HTTP error for a use case failure.

    Codes found in status_map become a ClientError with that status; any
    other code is unexpected at this route and becomes a ServerError.
    """
    status_code = status_map.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
