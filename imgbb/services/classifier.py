import structlog
from pydantic import ValidationError

from imgbb.core.exceptions import ErrorKind, ImgBBError
from imgbb.schemas.images import ApiResponse

logger = structlog.get_logger()

UNKNOWN_ERROR_MESSAGE = "Unknown error"
UNSPECIFIED_FAILURE_MESSAGE = "operation failed without a specific error"


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def classify_response(status_code: int, body: str) -> ApiResponse:
    """An ``error`` object always wins over the ``success`` flag."""
    try:
        response = ApiResponse.model_validate_json(body)
    except ValidationError:
        if _is_success(status_code):
            logger.warning("response_unparseable", status=status_code, length=len(body))
            return ApiResponse()
        raise ImgBBError(ErrorKind.API_ERROR, body, status=status_code) from None

    if response.error is not None:
        code = response.error.code if response.error.code is not None else 0
        message = response.error.message if response.error.message is not None else UNKNOWN_ERROR_MESSAGE
        raise ImgBBError.from_provider(message, status_code, code)

    if response.success is False:
        raise ImgBBError(ErrorKind.API_ERROR, UNSPECIFIED_FAILURE_MESSAGE, status=status_code)

    return response
