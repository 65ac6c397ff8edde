"""Activity statistics endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from chatdesk.models.schemas import StatsResponse
from chatdesk.storage.backend import KeyValueStorage, get_storage
from chatdesk.storage.usage import UsageCounter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def global_stats(
    storage: Annotated[KeyValueStorage, Depends(get_storage)],
) -> StatsResponse:
    """Report how many questions have been asked by all visitors.

    Returns:
        StatsResponse with the global search count.
    """
    return StatsResponse(total_searches=UsageCounter(storage).current())
