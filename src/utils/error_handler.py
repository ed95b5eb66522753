import logging
import traceback


logger = logging.getLogger(__name__)


class StoreFailure(Exception):
    """Непредвиденная ошибка хранилища. Детали пишутся только в лог."""

    def __init__(self, context: str = "") -> None:
        self.context = context
        super().__init__("Storage operation failed. Please try again.")


class ErrorHandler:
    def handle_error(self, error: Exception, context: str = "") -> StoreFailure:
        """Залогировать ошибку хранилища и вернуть непрозрачную ошибку для вызывающего."""
        error_msg = f"Error in {context}: {error}\n{traceback.format_exc()}"
        logger.error(error_msg)
        return StoreFailure(context)


error_handler = ErrorHandler()
