# desktask/core/errors.py


class DeskTaskError(Exception):
    """Base class for errors raised by desktask itself."""


class ConfigError(DeskTaskError):
    pass


class NotFoundError(DeskTaskError):
    pass


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: int):
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class SettingsNotFoundError(NotFoundError):
    def __init__(self, settings_id: int):
        super().__init__(f"settings row {settings_id} not found")
        self.settings_id = settings_id


class InvalidTaskError(DeskTaskError):
    pass
