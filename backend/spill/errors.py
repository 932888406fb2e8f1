"""Service-level failures.

Every error carries a message that is safe to show to a client and the HTTP
status the gateway should use where it signals failure through status codes.
"""


class ServiceError(Exception):
    status_code = 500
    message = 'Something went wrong'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    message = 'Invalid request'


class ConflictError(ServiceError):
    status_code = 409
    message = 'Resource already exists'


class NotFoundError(ServiceError):
    status_code = 404
    message = 'Not found'


class AuthenticationError(ServiceError):
    status_code = 401
    message = 'Invalid username or password'


class StoreError(ServiceError):
    # Never built from driver error text
    status_code = 500
    message = 'Database error occurred'
