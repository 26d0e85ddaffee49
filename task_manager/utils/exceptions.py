# task_manager/utils/exceptions.py
"""
Domain errors raised by the services layer.

Routers translate these into HTTP responses; anything that is not a
TaskManagerError is treated as an internal error.
"""


class TaskManagerError(Exception):
    """Base class for all expected failures"""


class NotFoundError(TaskManagerError):
    pass


class TaskNotFound(NotFoundError):
    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class UserNotFound(NotFoundError):
    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class ConflictError(TaskManagerError):
    pass


class DuplicateEmail(ConflictError):
    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


class InvalidCredentials(TaskManagerError):
    pass
