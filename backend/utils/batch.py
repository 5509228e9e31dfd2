# utils/batch.py
import asyncio
import logging
from typing import Callable, Iterable, List, Optional

from starlette.concurrency import run_in_threadpool

from config import settings
from schemas.bulk import BulkFailure, BulkResult
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)


def _chunks(items: List[int], size: int):
    for i in range(0, len(items), size):
        yield items[i:i + size]


async def run_in_batches(
    ids: Iterable[int],
    action: Callable[[int], None],
    batch_size: Optional[int] = None,
) -> BulkResult:
    """Apply a blocking ``action`` to every id, a fixed-size batch at a time.

    Items within a batch run concurrently in the threadpool; the next batch
    starts only once every item of the previous one has settled. A failing
    item is recorded and never aborts its siblings.
    """
    size = max(1, batch_size or settings.BULK_BATCH_SIZE)
    unique_ids = list(dict.fromkeys(ids))
    result = BulkResult()

    for batch in _chunks(unique_ids, size):
        outcomes = await asyncio.gather(
            *(run_in_threadpool(action, item_id) for item_id in batch),
            return_exceptions=True,
        )
        for item_id, outcome in zip(batch, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, NotFoundError):
                    logger.warning("Bulk item %s failed: %r", item_id, outcome)
                reason = str(outcome) or outcome.__class__.__name__
                result.failed.append(BulkFailure(id=item_id, reason=reason))
            else:
                result.succeeded.append(item_id)

    return result
