# utils/retry.py
from sqlalchemy.exc import SQLAlchemyError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from config import settings

def db_retry():
    """Retry transient database failures; other errors (e.g. not found) fail at once."""
    backoff = settings.RETRY_BACKOFF_SECONDS
    return retry(
        reraise=True,
        stop=stop_after_attempt(settings.RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=backoff, min=backoff, max=backoff * 10),
        retry=retry_if_exception_type(SQLAlchemyError),
    )
